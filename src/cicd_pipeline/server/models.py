"""Pydantic models for the demo API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Welcome(BaseModel):
    message: str
    version: str
    timestamp: str


class Health(BaseModel):
    status: str
    uptime: float = Field(description="Seconds since the process started serving")
    timestamp: str


class User(BaseModel):
    id: int
    name: str
    email: str


class UserList(BaseModel):
    users: list[User] = Field(default_factory=list)


class RouteNotFound(BaseModel):
    error: str = "Route not found"
    path: str
