"""
Shared fixtures.

Rate limiter counters are process-wide, so every test starts with a
full set of permits. The probe application adds routes that raise each
kind of failure the error handlers know about.
"""

import pytest
from fastapi import APIRouter, HTTPException, Query
from fastapi.testclient import TestClient
from pydantic import BaseModel, Field

from twiggle.main import create_app
from twiggle.shared.responses import created
from twiggle.shared.security.rate_limiting import rate_limiters


class PlantRequest(BaseModel):
    name: str = Field(..., min_length=1)
    spacing_cm: int


probe = APIRouter(prefix="/probe")


@probe.get("/plots")
def list_plots(limit: int = Query(..., ge=1), name: str = Query(...)) -> dict:
    return {"limit": limit, "name": name}


@probe.post("/plants")
def create_plant(plant: PlantRequest):
    return created("Plant created", plant.name)


@probe.get("/forbidden")
def forbidden() -> None:
    raise PermissionError("plot belongs to another gardener")


@probe.get("/constraint")
def constraint() -> None:
    PlantRequest.model_validate({"name": "", "spacing_cm": 30})


@probe.post("/upload")
def upload() -> None:
    raise HTTPException(status_code=415)


@probe.get("/conflict")
def conflict() -> None:
    raise HTTPException(status_code=409, detail="Plot already exists")


@probe.get("/unauthorized")
def unauthorized() -> None:
    raise HTTPException(status_code=401)


@probe.get("/crash")
def crash() -> None:
    raise RuntimeError("database exploded")


@pytest.fixture(autouse=True)
def reset_rate_limiters():
    """Restore every permit before and after each test."""
    rate_limiters.reset()
    yield
    rate_limiters.reset()


@pytest.fixture
def probe_client() -> TestClient:
    """Client for an application extended with failure-raising routes."""
    app = create_app()
    app.include_router(probe)
    return TestClient(app, raise_server_exceptions=False)
