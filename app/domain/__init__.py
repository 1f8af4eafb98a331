"""
Domain layer package.

Contains records, queries, port interfaces and domain errors.
No framework imports, no IO.
"""
