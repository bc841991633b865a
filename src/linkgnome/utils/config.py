"""Layered configuration for linkgnome.

Settings are resolved with the precedence CLI > environment > config file >
default. Environment variables are named ``LINKGNOME_<KEY>`` (dots become
underscores) and the config file is ``$XDG_CONFIG_HOME/linkgnome/config.toml``,
parsed with tomli. Example file::

    destination = "/srv/media"
    extensions = ["mkv", "mp4"]
    exclude = ["(?i)extras"]
    workers = 8

    [tmdb]
    rate_limit = 40
    burst = 40
"""

import contextlib
import os
from pathlib import Path
from typing import Any, List, Optional, TypeVar, cast

import tomli

ENV_PREFIX = "LINKGNOME_"
_TRUTHY = {"1", "true", "yes", "on"}

T = TypeVar("T")


class ConfigError(Exception):
    """Raised when the config file exists but cannot be parsed."""


def config_path() -> Path:
    """Return the config file path, honouring ``XDG_CONFIG_HOME``."""
    base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "linkgnome" / "config.toml"


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""
    path = config_path()
    if not path.exists():
        return {}
    try:
        with path.open("rb") as f:
            return tomli.load(f)
    except tomli.TOMLDecodeError as e:
        raise ConfigError(f"invalid config file {path}: {e}") from e


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve ``data["a"]["b"]`` for ``"a.b"``, or None if any level is missing."""
    current: Any = data
    for part in dotted_key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str, prefix: str = ENV_PREFIX) -> str:
    """Convert a dotted key to its env var, e.g. ``tmdb.burst`` -> ``LINKGNOME_TMDB_BURST``."""
    return prefix + dotted_key.replace(".", "_").upper()


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _coerce(value: Any, default: T) -> T:
    """Coerce an env or file *value* to the type of *default*.

    Values that cannot be coerced fall back to *default*.
    """
    if isinstance(default, bool):
        if isinstance(value, bool):
            return cast(T, value)
        return cast(T, str(value).lower() in _TRUTHY)
    if isinstance(default, int):
        with contextlib.suppress(TypeError, ValueError):
            return cast(T, int(value))
        return default
    if isinstance(default, float):
        with contextlib.suppress(TypeError, ValueError):
            return cast(T, float(value))
        return default
    if isinstance(default, (list, set, tuple)):
        items = _split_list(value) if isinstance(value, str) else [str(v) for v in value]
        return cast(T, type(default)(items))
    return cast(T, value)


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: Optional[T] = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"tmdb.rate_limit"`` or ``"destination"``.
        default: Value to fall back to; also decides how strings are coerced.
            List defaults accept comma-separated env values.
        cli_value: Value passed on the command line (None or empty when not
            given).

    Returns:
        The resolved value with type matching *default*.

    Raises:
        ConfigError: If the config file is not valid TOML.
    """
    if cli_value is not None and cli_value != [] and cli_value != ():
        return cli_value

    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return _coerce(os.environ[env_var], default)

    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return _coerce(file_val, default)

    return default
