"""
Core package.

Holds application settings and OpenAPI documentation grouping.
"""
