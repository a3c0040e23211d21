"""Group resources (``/api/v1/groups``)."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from oktakit.resources.base import Resource


class GroupProfile(Resource):
    name: Optional[str] = None
    description: Optional[str] = None


class Group(Resource):
    """An Okta group.

    ``type`` is ``OKTA_GROUP``, ``APP_GROUP`` or ``BUILT_IN``; only
    ``OKTA_GROUP`` groups can be modified through the API.
    """

    id: Optional[str] = None
    created: Optional[datetime] = None
    last_updated: Optional[datetime] = None
    last_membership_updated: Optional[datetime] = None
    object_class: list[str] = Field(default_factory=list)
    type: Optional[str] = None
    profile: GroupProfile = Field(default_factory=GroupProfile)
