"""
Shared module package.

Contains cross-cutting concerns used across bounded contexts:
- Input validation primitives and result types
- Error normalization
- Security middleware and rate limiting
- Logging configuration
"""
