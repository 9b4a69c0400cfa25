"""Expense bounded context: entities, ports, and domain errors."""
