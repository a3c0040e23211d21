"""User resources (``/api/v1/users``)."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from oktakit.resources.base import Resource


class UserProfile(Resource):
    """Base user profile; custom attributes land in ``model_extra``."""

    login: Optional[str] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    second_email: Optional[str] = None
    mobile_phone: Optional[str] = None


class User(Resource):
    id: Optional[str] = None
    status: Optional[str] = None
    created: Optional[datetime] = None
    activated: Optional[datetime] = None
    status_changed: Optional[datetime] = None
    last_login: Optional[datetime] = None
    last_updated: Optional[datetime] = None
    password_changed: Optional[datetime] = None
    type: Optional[dict[str, Any]] = None
    profile: UserProfile = Field(default_factory=UserProfile)
    credentials: Optional[dict[str, Any]] = None
