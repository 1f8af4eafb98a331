"""
Application layer package.

Use cases orchestrating domain ports. No HTTP concerns here.
"""
