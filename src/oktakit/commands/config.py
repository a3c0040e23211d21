"""Config commands -- ``oktakit config show|init``."""

from __future__ import annotations

from typing import Optional

import typer

from oktakit.exit_codes import EXIT_INVALID_USAGE
from oktakit.output import error, info, print_document, success

config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show the global configuration and the active profile.

    Example::

        oktakit config show --json
    """
    from oktakit.config import get_config_dir, list_profiles, resolve_config

    obj = ctx.obj or {}
    config, profile = resolve_config(cli_profile=obj.get("profile"))
    info(f"Config directory: {get_config_dir()}")
    print_document(
        {
            "config": config.model_dump(mode="json"),
            "profiles": list_profiles(),
            "active_profile": profile.model_dump(mode="json") if profile else None,
        }
    )


@config_app.command("init")
def config_init(
    org_url: str = typer.Option(..., "--org-url", help="Org URL, e.g. https://dev-1.okta.com"),
    name: str = typer.Option("default", "--name", help="Profile name."),
    auth_type: str = typer.Option("ssws", "--auth-type", help="ssws or bearer."),
    token_source: str = typer.Option(
        "env:OKTA_CLIENT_TOKEN",
        "--token-source",
        help="Credential source: env:VAR, file:/path, prompt.",
    ),
    make_default: bool = typer.Option(
        True, "--default/--no-default", help="Make this the default profile."
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing profile."),
    timeout: Optional[int] = typer.Option(None, "--timeout", help="Request timeout in seconds."),
) -> None:
    """Create a profile for an Okta org.

    Example::

        oktakit config init --org-url https://dev-1.okta.com --token-source env:OKTA_TOKEN
    """
    from oktakit.auth import create_default_manager
    from oktakit.config import (
        load_global_config,
        profile_exists,
        save_global_config,
        save_profile,
    )
    from oktakit.models import AuthConfig, Profile, RequestConfig

    if not org_url.startswith(("https://", "http://")):
        error(f"Org URL must start with https:// (got '{org_url}')")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    if profile_exists(name) and not force:
        error(f"Profile '{name}' already exists. Use --force to overwrite.")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    auth = AuthConfig(type=auth_type, source=token_source)
    manager = create_default_manager()
    if auth_type not in manager.list_types():
        error(f"Unknown auth type '{auth_type}'. Available: {', '.join(manager.list_types())}")
        raise typer.Exit(code=EXIT_INVALID_USAGE)
    problems = manager.get_plugin(auth_type).validate_config(auth)
    if problems:
        for problem in problems:
            error(problem)
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    request = RequestConfig(timeout=timeout) if timeout is not None else RequestConfig()
    save_profile(Profile(name=name, org_url=org_url.rstrip("/"), auth=auth, request=request))

    if make_default:
        config = load_global_config()
        config.default_profile = name
        save_global_config(config)

    success(f"Profile '{name}' saved.")
