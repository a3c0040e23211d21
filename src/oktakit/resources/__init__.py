"""Typed resource models for Okta API payloads.

Every model derives from :class:`Resource`: camelCase aliases on the wire,
snake_case attributes in Python, and unknown properties preserved so that
custom profile attributes survive a read-modify-write round trip.
"""

from oktakit.resources.base import Resource
from oktakit.resources.group import Group, GroupProfile
from oktakit.resources.user import User, UserProfile

__all__ = ["Resource", "Group", "GroupProfile", "User", "UserProfile"]
