"""
Shared module package.

Contains cross-cutting concerns used by every router:
- Error taxonomy, fault translation and centralized dispatch
- Rate limiting
- Success response building
- Logging configuration
"""
