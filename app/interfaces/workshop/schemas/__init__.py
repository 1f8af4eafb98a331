"""
Per-entity input schemas.

Each module declares the create, update and filter schemas of one
entity on top of the shared coercion primitives.
"""

from app.interfaces.workshop.schemas.registry import SCHEMA_REGISTRY, get_schemas

__all__ = ["SCHEMA_REGISTRY", "get_schemas"]
