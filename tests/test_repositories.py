"""
Tests for the food repositories.

Contract tests run against both implementations (SQL and in-memory):
- create/find_by_id/find_all materialize ingredients fully
- ingredients are shared by name across foods
- update replaces or keeps the ingredient set
- delete removes the food but never the ingredients

SQL-only tests cover transactions:
- a failure while attaching ingredients leaves no food and no ingredient behind
- a failed update keeps the previous state
- foreign key cascade from foods to food_ingredients
"""

import pytest
from sqlalchemy import func, select, text
from sqlalchemy.exc import OperationalError

from domain.models import Food, FoodIngredient, Ingredient
from test_fixtures import make_food_create, make_food_update


def _ids_by_name(food):
    return {i.name: i.ingredient_id for i in food.ingredients}


# =============================================================================
# CONTRACT TESTS (both backends)
# =============================================================================


def test_create_returns_materialized_food(food_repository):
    """
    Verifies:
    - create() assigns an id and timestamps
    - the returned food carries every distinct ingredient with id and name
    """
    food = food_repository.create(
        make_food_create("Pizza", ingredients=["Tomato", "Cheese", "Basil"])
    )

    assert food.food_id is not None
    assert food.name == "Pizza"
    assert food.description == "Delicious cheesy pizza"
    assert food.created_at is not None
    assert food.updated_at is not None
    assert food.ingredient_names() == {"Tomato", "Cheese", "Basil"}
    assert len({i.ingredient_id for i in food.ingredients}) == 3


def test_find_by_id_after_create_matches_supplied_names(food_repository):
    created = food_repository.create(
        make_food_create("Salad", ingredients=["Lettuce", "Cucumber"])
    )

    found = food_repository.find_by_id(created.food_id)

    assert found is not None
    assert found.ingredient_names() == {"Lettuce", "Cucumber"}
    assert found == created


def test_create_without_ingredients(food_repository):
    food = food_repository.create(make_food_create("Water", description=None))

    assert food.ingredients == []
    assert food.description is None
    assert food_repository.find_by_id(food.food_id).ingredients == []


def test_duplicate_names_collapse_to_one_attachment(food_repository):
    food = food_repository.create(
        make_food_create("Caprese", ingredients=["Tomato", "Tomato", "Mozzarella"])
    )

    assert len(food.ingredients) == 2
    assert food.ingredient_names() == {"Tomato", "Mozzarella"}


def test_second_food_reuses_existing_ingredient(food_repository):
    """
    Verifies:
    - Pizza creates Tomato, Cheese and Basil
    - Burger reuses the Tomato id from Pizza and creates only Lettuce
    """
    pizza = food_repository.create(
        make_food_create("Pizza", ingredients=["Tomato", "Cheese", "Basil"])
    )
    burger = food_repository.create(
        make_food_create("Burger", description=None, ingredients=["Tomato", "Lettuce"])
    )

    assert _ids_by_name(burger)["Tomato"] == _ids_by_name(pizza)["Tomato"]
    assert _ids_by_name(burger)["Lettuce"] not in _ids_by_name(pizza).values()


def test_ingredient_names_are_case_sensitive(food_repository):
    food = food_repository.create(make_food_create(ingredients=["tomato", "Tomato"]))

    assert len(food.ingredients) == 2


def test_find_all_empty(food_repository):
    assert food_repository.find_all() == []


def test_find_all_returns_every_food_with_ingredients(food_repository):
    pizza = food_repository.create(make_food_create("Pizza", ingredients=["Tomato", "Cheese"]))
    soup = food_repository.create(make_food_create("Soup", ingredients=["Tomato"]))
    bread = food_repository.create(make_food_create("Bread"))

    foods = food_repository.find_all()

    assert [f.food_id for f in foods] == [pizza.food_id, soup.food_id, bread.food_id]
    assert foods[0].ingredient_names() == {"Tomato", "Cheese"}
    assert foods[1].ingredient_names() == {"Tomato"}
    assert foods[2].ingredients == []


def test_find_by_id_missing_returns_none(food_repository):
    assert food_repository.find_by_id(9999) is None
    assert food_repository.exists(9999) is False


def test_update_fields_without_ingredients_keeps_attachments(food_repository):
    food = food_repository.create(make_food_create("Pizza", ingredients=["Tomato", "Cheese"]))

    updated = food_repository.update(
        food.food_id, make_food_update(name="Pizza Margherita", description="Classic")
    )

    assert updated.name == "Pizza Margherita"
    assert updated.description == "Classic"
    assert updated.ingredients == food.ingredients
    assert updated.updated_at >= food.updated_at
    assert updated.created_at == food.created_at


def test_update_with_ingredients_replaces_set(food_repository):
    """
    Verifies:
    - ["Tomato", "Cheese"] replaced by ["Lettuce"] leaves exactly Lettuce attached
    - Tomato and Cheese still exist for other foods to reuse
    """
    food = food_repository.create(make_food_create("Pizza", ingredients=["Tomato", "Cheese"]))
    old_ids = _ids_by_name(food)

    updated = food_repository.update(food.food_id, make_food_update(ingredients=["Lettuce"]))

    assert updated.ingredient_names() == {"Lettuce"}
    assert updated.name == "Pizza"

    # Dictionary rows survive: a new food gets the same ids back
    other = food_repository.create(make_food_create("Sandwich", ingredients=["Tomato", "Cheese"]))
    assert _ids_by_name(other) == old_ids


def test_update_with_empty_ingredient_list_clears_attachments(food_repository):
    food = food_repository.create(make_food_create("Pizza", ingredients=["Tomato"]))

    updated = food_repository.update(food.food_id, make_food_update(ingredients=[]))

    assert updated.ingredients == []


def test_update_ignores_blank_fields(food_repository):
    food = food_repository.create(make_food_create("Pizza", description="Cheesy"))

    updated = food_repository.update(food.food_id, make_food_update(name="", description=""))

    assert updated.name == "Pizza"
    assert updated.description == "Cheesy"


def test_update_missing_food_returns_none(food_repository):
    assert food_repository.update(424242, make_food_update(name="Ghost")) is None
    assert food_repository.update(424242, make_food_update(ingredients=["Tomato"])) is None


def test_delete_existing_then_missing(food_repository):
    food = food_repository.create(make_food_create("Pizza", ingredients=["Tomato"]))

    assert food_repository.delete(food.food_id) is True
    assert food_repository.find_by_id(food.food_id) is None
    assert food_repository.delete(food.food_id) is False


def test_delete_keeps_shared_ingredients(food_repository):
    pizza = food_repository.create(make_food_create("Pizza", ingredients=["Tomato"]))
    soup = food_repository.create(make_food_create("Soup", ingredients=["Tomato"]))

    food_repository.delete(pizza.food_id)

    assert food_repository.find_by_id(soup.food_id).ingredients == soup.ingredients


# =============================================================================
# SQL TRANSACTION TESTS
# =============================================================================


def _count(session, model):
    return session.execute(select(func.count()).select_from(model)).scalar_one()


def test_create_rolls_back_when_attachment_fails(sql_repository, db_session, monkeypatch):
    """
    Verifies:
    - a storage error on the third ingredient propagates to the caller
    - no food row and none of the ingredients created before the failure survive
    """
    ingredient_repo = sql_repository.attachments.ingredient_repo
    original_resolve = ingredient_repo.resolve

    def failing_resolve(name):
        if name == "Basil":
            raise OperationalError("INSERT INTO ingredients", {}, Exception("disk I/O error"))
        return original_resolve(name)

    monkeypatch.setattr(ingredient_repo, "resolve", failing_resolve)

    with pytest.raises(OperationalError):
        sql_repository.create(make_food_create("Pizza", ingredients=["Tomato", "Cheese", "Basil"]))

    assert sql_repository.find_all() == []
    assert _count(db_session, Food) == 0
    assert _count(db_session, Ingredient) == 0
    assert _count(db_session, FoodIngredient) == 0


def test_update_rolls_back_when_attachment_fails(sql_repository, monkeypatch):
    food = sql_repository.create(make_food_create("Pizza", ingredients=["Tomato", "Cheese"]))
    ingredient_repo = sql_repository.attachments.ingredient_repo

    def failing_resolve(name):
        raise OperationalError("SELECT", {}, Exception("connection lost"))

    monkeypatch.setattr(ingredient_repo, "resolve", failing_resolve)

    with pytest.raises(OperationalError):
        sql_repository.update(
            food.food_id, make_food_update(name="Renamed", ingredients=["Lettuce"])
        )

    monkeypatch.undo()
    current = sql_repository.find_by_id(food.food_id)
    assert current.name == "Pizza"
    assert current.ingredients == food.ingredients


def test_delete_rolls_back_when_detach_fails(sql_repository, monkeypatch):
    food = sql_repository.create(make_food_create("Pizza", ingredients=["Tomato", "Cheese"]))

    def failing_detach_all(food_id):
        raise OperationalError("DELETE FROM food_ingredients", {}, Exception("database is locked"))

    monkeypatch.setattr(sql_repository.attachments, "detach_all", failing_detach_all)

    with pytest.raises(OperationalError):
        sql_repository.delete(food.food_id)

    monkeypatch.undo()
    current = sql_repository.find_by_id(food.food_id)
    assert current is not None
    assert current.ingredients == food.ingredients


def test_session_usable_after_update_of_missing_food(sql_repository):
    assert sql_repository.update(777, make_food_update(name="Nope")) is None

    food = sql_repository.create(make_food_create("Pizza"))
    assert sql_repository.find_by_id(food.food_id) is not None


def test_delete_removes_attachment_rows_only(sql_repository, db_session):
    food = sql_repository.create(make_food_create("Pizza", ingredients=["Tomato", "Cheese"]))

    sql_repository.delete(food.food_id)

    assert _count(db_session, FoodIngredient) == 0
    assert _count(db_session, Ingredient) == 2


def test_foreign_key_cascade_is_enforced(sql_repository, db_session):
    """Deleting a food row directly also drops its join rows (PRAGMA foreign_keys)"""
    food = sql_repository.create(make_food_create("Pizza", ingredients=["Tomato"]))

    db_session.execute(text("DELETE FROM foods WHERE food_id = :id"), {"id": food.food_id})
    db_session.commit()

    assert _count(db_session, FoodIngredient) == 0


def test_update_bumps_updated_at_even_when_only_ingredients_change(sql_repository, db_session):
    food = sql_repository.create(make_food_create("Pizza", ingredients=["Tomato"]))
    db_session.execute(
        text("UPDATE foods SET updated_at = '2000-01-01 00:00:00' WHERE food_id = :id"),
        {"id": food.food_id},
    )
    db_session.commit()

    updated = sql_repository.update(food.food_id, make_food_update(ingredients=["Basil"]))

    assert updated.updated_at.year > 2000
