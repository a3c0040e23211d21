"""Resource clients, one per API area.

Each client turns method calls into :class:`~oktakit.models.HttpRequest`
objects and hands them to the shared :class:`~oktakit.datastore.DataStore`.
List methods return a lazy :class:`~oktakit.collection.Collection`.
"""

from oktakit.api.base import ResourceClient
from oktakit.api.groups import GroupsClient
from oktakit.api.users import UsersClient

__all__ = ["ResourceClient", "GroupsClient", "UsersClient"]
