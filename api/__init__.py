"""
HTTP layer - routes, middleware, dependencies and response envelopes.
"""
