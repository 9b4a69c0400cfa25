"""
Domain layer package.

Contains the expense entity, the repository port, and domain errors.
No framework imports, no IO.
"""
