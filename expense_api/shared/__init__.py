"""
Shared module package.

Contains cross-cutting concerns:
- Error mapping and exception handlers
- Authentication and rate limiting
- Logging configuration and request context
"""
