"""
Twiggle: REST API backend for the Urban Garden Planner.

Application package root. The service is a thin FastAPI scaffold:

Layers:
    - core: Configuration and OpenAPI documentation grouping.
    - interfaces: FastAPI routers and Pydantic response schemas.
    - shared: Cross-cutting concerns (errors, rate limiting, logging, responses).
"""
