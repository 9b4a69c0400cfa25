"""
Expense Tracker: REST API for recording and reviewing expenses.

Application package root. This is a small service laid out with
hexagonal architecture (ports & adapters).

Layers:
    - domain: Entities, ports (ABCs), errors. No framework imports.
    - infrastructure: Adapters implementing domain ports (SQL, in-memory).
    - interfaces: FastAPI routers, request handler, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
