"""
Shared error handling package.

Centralizes error-to-HTTP mapping so that every error response
uses the same field-to-message shape.
"""
