"""
OpenAPI documentation groups.

Splits the API surface into separately documented groups, each built
from the routes whose path matches the group's pattern. Patterns use
the ``/prefix/**`` form: the prefix itself and everything below it.
"""

from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

RECURSIVE_SUFFIX = "/**"


@dataclass(frozen=True)
class ApiGroup:
    """A documented slice of the API.

    Attributes:
        name: Display name of the group.
        slug: URL-safe key used to fetch the group's document.
        path_pattern: Routes matching this pattern belong to the group.
        title: OpenAPI ``info.title``.
        description: OpenAPI ``info.description``.
        version: OpenAPI ``info.version``.
    """

    name: str
    slug: str
    path_pattern: str
    title: str
    description: str
    version: str = "1.0"

    def matches(self, path: str) -> bool:
        if self.path_pattern.endswith(RECURSIVE_SUFFIX):
            prefix = self.path_pattern[: -len(RECURSIVE_SUFFIX)]
            return path == prefix or path.startswith(prefix + "/")
        return fnmatchcase(path, self.path_pattern)


ACTUATOR_GROUP = ApiGroup(
    name="Actuator API",
    slug="actuator",
    path_pattern="/actuator/**",
    title="Actuator API Documentation",
    description="API endpoints for application monitoring and management",
)
APPLICATION_GROUP = ApiGroup(
    name="Application API",
    slug="application",
    path_pattern="/api/**",
    title="Twiggle API Documentation",
    description="API endpoints for Urban Garden Planner",
)

API_GROUPS = (ACTUATOR_GROUP, APPLICATION_GROUP)


def find_group(slug: str) -> ApiGroup | None:
    """Return the group with this slug, if any."""
    return next((group for group in API_GROUPS if group.slug == slug), None)


def build_group_openapi(app: FastAPI, group: ApiGroup) -> dict[str, Any]:
    """Generate the OpenAPI document for one group's routes.

    The full document is built from ``app.routes`` and then narrowed by
    path, so included routers are expanded by FastAPI itself.
    """
    document = get_openapi(
        title=group.title,
        version=group.version,
        description=group.description,
        routes=app.routes,
    )
    document["paths"] = {
        path: item
        for path, item in document.get("paths", {}).items()
        if group.matches(path)
    }
    return document
