"""Built-in CLI sub-commands for oktakit.

* :mod:`~oktakit.commands.groups` -- list, show, and inspect group members.
* :mod:`~oktakit.commands.users` -- list, show, and inspect a user's groups.
* :mod:`~oktakit.commands.config` -- view settings and create profiles.

Each module exports a :class:`typer.Typer` sub-application registered on
the root app by :func:`oktakit.app._register_commands`.
"""
