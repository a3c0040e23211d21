"""oktakit -- async client for the Okta identity-management API.

Remote resources (groups, users) are exposed as pydantic models, and every
``list_*`` call returns a lazy :class:`~oktakit.collection.Collection` that
follows Okta's ``Link: rel="next"`` pagination as you iterate::

    from oktakit import OktaClient
    from oktakit.config import resolve_config

    _, profile = resolve_config()
    async with OktaClient(profile) as client:
        async for group in client.groups.list_groups(q="eng"):
            print(group.profile.name)

Modules:
    collection: Page-level and item-level cursors over paged collections.
    datastore: Request execution and deserialisation.
    client: HTTP transport and the :class:`OktaClient` facade.
    api: Groups and users resource clients.
    resources: Pydantic resource models.
    config: XDG-aware configuration and profile management.
    exceptions: Exception hierarchy with exit-code mapping.
    app: Typer CLI entry point.
"""

__version__ = "0.1.0"

from oktakit.client import OktaClient  # noqa: E402
from oktakit.collection import Collection  # noqa: E402
from oktakit.models import Profile, RequestContext  # noqa: E402

__all__ = ["OktaClient", "Collection", "Profile", "RequestContext", "__version__"]
