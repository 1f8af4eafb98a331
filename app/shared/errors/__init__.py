"""
Shared error handling package.

The single place where failures are turned into HTTP responses,
so every error reaching a client has the same envelope.
"""
