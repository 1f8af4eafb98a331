"""
Infrastructure layer package.

Adapters implementing the domain ports.
"""
