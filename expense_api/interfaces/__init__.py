"""
Interface layer package.

HTTP routers, request handlers and Pydantic schemas.
"""
