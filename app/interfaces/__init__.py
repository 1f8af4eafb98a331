"""
Interfaces layer package.

Contains FastAPI routers and the per-entity schema registry.
Routes validate input, call use cases and return responses.
"""
