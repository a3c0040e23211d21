"""Where oktakit keeps its settings, and how the active org is chosen.

Layout (Linux/BSD follow XDG; macOS and Windows use ``~/.oktakit/``)::

    $XDG_CONFIG_HOME/oktakit/config.json          GlobalConfig
    $XDG_CONFIG_HOME/oktakit/profiles/<name>.json one Profile per org
    $XDG_DATA_HOME/oktakit/logs/                  crash logs
    ./oktakit.json                                optional project pin

Files are JSON documents validated by the pydantic models in
:mod:`oktakit.models` and replaced atomically on save.

The active profile is picked by :func:`resolve_config`. Secrets never live
in profile files; a profile names a credential *source* that
:func:`resolve_credential` reads at connect time.
"""

from __future__ import annotations

import getpass
import json
import os
import platform
import re
import sys
import tempfile
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from oktakit.exceptions import ConfigError
from oktakit.models import AuthConfig, GlobalConfig, Profile

_APP_NAME = "oktakit"
_GLOBAL_FILE = "config.json"
_PROJECT_FILE = "oktakit.json"
_PROFILE_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")

ENV_PROFILE = "OKTAKIT_PROFILE"
ENV_ORG_URL = "OKTA_CLIENT_ORGURL"
ENV_TOKEN = "OKTA_CLIENT_TOKEN"

M = TypeVar("M", bound=BaseModel)


# --- Directories ---


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _app_dir(xdg_var: str, xdg_default: str, fallback: str) -> Path:
    """Return (and create) an application directory.

    ``xdg_default`` is relative to the home directory and used when
    ``xdg_var`` is unset; ``fallback`` is relative to ``~/.oktakit`` on
    non-XDG platforms.
    """
    if _is_xdg_platform():
        root = os.environ.get(xdg_var) or str(Path.home() / xdg_default)
        path = Path(root) / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}" / fallback
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """``$XDG_CONFIG_HOME/oktakit`` (default ``~/.config/oktakit``), or ``~/.oktakit``."""
    return _app_dir("XDG_CONFIG_HOME", ".config", "")


def get_data_dir() -> Path:
    """``$XDG_DATA_HOME/oktakit`` (default ``~/.local/share/oktakit``), or ``~/.oktakit/data``."""
    return _app_dir("XDG_DATA_HOME", os.path.join(".local", "share"), "data")


def get_profiles_dir() -> Path:
    path = get_config_dir() / "profiles"
    path.mkdir(exist_ok=True)
    return path


# --- JSON documents ---


def _atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* so readers never see a partial file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def _read_json(path: Path, what: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise ConfigError(f"Invalid {what} at {path}: {exc}") from exc


def _load_model(path: Path, model: type[M], what: str) -> M:
    data = _read_json(path, what)
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid {what} at {path}: {exc}") from exc


def _save_model(path: Path, document: BaseModel) -> None:
    _atomic_write(path, json.dumps(document.model_dump(mode="json"), indent=2) + "\n")


# --- Global config ---


def load_global_config() -> GlobalConfig:
    """Return the saved :class:`GlobalConfig`, or defaults when there is none.

    Raises:
        ConfigError: If the file exists but cannot be parsed.
    """
    path = get_config_dir() / _GLOBAL_FILE
    if not path.is_file():
        return GlobalConfig()
    return _load_model(path, GlobalConfig, "global config")


def save_global_config(config: GlobalConfig) -> None:
    _save_model(get_config_dir() / _GLOBAL_FILE, config)


# --- Profiles ---


def _profile_path(name: str) -> Path:
    if not _PROFILE_NAME_RE.match(name):
        raise ConfigError(
            f"Invalid profile name '{name}': use letters, digits, '.', '_' or '-'"
        )
    return get_profiles_dir() / f"{name}.json"


def list_profiles() -> list[str]:
    return sorted(p.stem for p in get_profiles_dir().glob("*.json"))


def profile_exists(name: str) -> bool:
    return _profile_path(name).is_file()


def load_profile(name: str) -> Profile:
    """Read ``profiles/<name>.json``.

    Raises:
        ConfigError: If the profile is missing, unreadable, or invalid.
    """
    path = _profile_path(name)
    if not path.is_file():
        raise ConfigError(f"Profile '{name}' not found at {path}")
    return _load_model(path, Profile, f"profile '{name}'")


def save_profile(profile: Profile) -> None:
    _save_model(_profile_path(profile.name), profile)


def load_project_config() -> Optional[dict[str, Any]]:
    """Return ``./oktakit.json`` if the working directory has one."""
    path = Path.cwd() / _PROJECT_FILE
    if not path.is_file():
        return None
    return _read_json(path, "project config")


# --- Active profile ---


def _profile_from_env() -> Optional[Profile]:
    """An unsaved SSWS profile built from ``OKTA_CLIENT_ORGURL`` and ``OKTA_CLIENT_TOKEN``."""
    org_url = os.environ.get(ENV_ORG_URL)
    if not org_url or not os.environ.get(ENV_TOKEN):
        return None
    return Profile(
        name="env",
        org_url=org_url,
        auth=AuthConfig(type="ssws", source=f"env:{ENV_TOKEN}"),
    )


def _profile_name(global_cfg: GlobalConfig, cli_profile: Optional[str]) -> Optional[str]:
    project = load_project_config() or {}
    candidates = (
        cli_profile,
        os.environ.get(ENV_PROFILE) or None,
        project.get("default_profile"),
        global_cfg.default_profile,
    )
    for name in candidates:
        if name is not None:
            return name

    if global_cfg.auto_select_single_profile:
        profiles = list_profiles()
        if len(profiles) == 1:
            return profiles[0]
    return None


def resolve_config(
    cli_profile: Optional[str] = None,
    cli_org_url: Optional[str] = None,
    cli_format: Optional[str] = None,
) -> tuple[GlobalConfig, Optional[Profile]]:
    """Work out the global settings and the profile to connect with.

    The profile name comes from the first of: ``cli_profile``,
    ``$OKTAKIT_PROFILE``, ``./oktakit.json``, the global ``default_profile``,
    and finally the only saved profile (if ``auto_select_single_profile``).
    With no name at all, ``$OKTA_CLIENT_ORGURL`` plus ``$OKTA_CLIENT_TOKEN``
    give an ephemeral profile. The org URL can then be overridden by
    ``cli_org_url`` or ``$OKTA_CLIENT_ORGURL``.

    Returns:
        ``(global_config, profile)``; ``profile`` is ``None`` when nothing
        is configured.

    Raises:
        ConfigError: If the chosen profile does not exist or is invalid.
    """
    global_cfg = load_global_config()
    if cli_format is not None:
        global_cfg.output.format = cli_format

    name = _profile_name(global_cfg, cli_profile)
    profile = load_profile(name) if name is not None else _profile_from_env()

    if profile is not None:
        org_url = cli_org_url or os.environ.get(ENV_ORG_URL)
        if org_url:
            profile.org_url = org_url
    return global_cfg, profile


# --- Credentials ---


def _from_env(var_name: str) -> str:
    value = os.environ.get(var_name)
    if value is None:
        raise ConfigError(f"Environment variable '{var_name}' is not set (source: env:{var_name})")
    return value


def _from_file(location: str) -> str:
    path = Path(location).expanduser()
    try:
        return path.read_text(encoding="utf-8").strip()
    except FileNotFoundError as exc:
        raise ConfigError(f"Credential file not found: {path}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc


def _from_prompt(_: str) -> str:
    if not sys.stdin.isatty():
        raise ConfigError("Cannot prompt for the API token: stdin is not a TTY")
    return getpass.getpass("Okta API token: ")


_CREDENTIAL_READERS: dict[str, Callable[[str], str]] = {
    "env": _from_env,
    "file": _from_file,
    "prompt": _from_prompt,
}


def resolve_credential(source: str) -> str:
    """Read a secret from ``env:VAR``, ``file:/path`` or ``prompt``.

    Raises:
        ConfigError: If the source is unknown or yields nothing.
    """
    scheme, _, argument = source.partition(":")
    reader = _CREDENTIAL_READERS.get(scheme)
    if reader is None:
        raise ConfigError(f"Unknown credential source format: {source}")
    if scheme != "prompt" and not argument:
        raise ConfigError(f"Credential source '{source}' is missing a value")
    return reader(argument)
