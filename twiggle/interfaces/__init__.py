"""
Interfaces layer package.

Contains FastAPI routers and Pydantic response schemas.
Routes never format errors themselves; they raise and let the
centralized handlers render the response.
"""
