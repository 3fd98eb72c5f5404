"""
Shared error handling package.

Centralizes error-to-HTTP mapping so that every fault raised while
handling a request is rendered with the same JSON error shape.
"""
