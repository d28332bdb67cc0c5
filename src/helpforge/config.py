"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for helpforge:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.helpforge/`` on macOS and Windows. See :func:`get_config_dir`,
  :func:`get_data_dir`, :func:`get_tools_dir`.
* **Global config** -- A single :class:`~helpforge.models.GlobalConfig`
  JSON file storing defaults (output format).
* **Tool profiles** -- YAML or JSON files deserialised into
  :class:`~helpforge.models.ToolProfile`. :func:`resolve_tool_profile`
  picks one for a tool name through the precedence chain.

All file writes use an atomic temp-file-then-rename strategy
(:func:`atomic_write`) so that an interrupted run never leaves a truncated
completion script behind.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from helpforge.exceptions import ConfigError
from helpforge.models import GlobalConfig, ToolProfile
from helpforge.tools import BUILTIN_PROFILES, generic_profile

_APP_NAME = "helpforge"
_CONFIG_FILENAME = "config.json"
_PROFILE_ENV_VAR = "HELPFORGE_PROFILE"
_PROFILE_SUFFIXES = (".yaml", ".yml", ".json")


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform follows the XDG Base Directory layout (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/helpforge/`` (default ``~/.config/helpforge/``).
    On macOS/Windows: ``~/.helpforge/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/helpforge/`` (default ``~/.local/share/helpforge/``).
    On macOS/Windows: ``~/.helpforge/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_tools_dir() -> Path:
    """Return the user tool-profile directory (``<config_dir>/tools/``), creating it if necessary."""
    path = get_config_dir() / "tools"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_fish_completions_dir() -> Path:
    """Return fish's per-user completions directory (not created)."""
    return _xdg_base("XDG_CONFIG_HOME", (".config",)) / "fish" / "completions"


# --- Atomic file writes ---


def atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is guaranteed to be an atomic rename on POSIX systems.
    On success the temp file is renamed over *path*; on any failure the temp
    file is cleaned up.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close in finally
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up the temp file on any error (including KeyboardInterrupt).
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def _global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the XDG config directory.

    Returns:
        The deserialised :class:`~helpforge.models.GlobalConfig`. If the
        file does not exist, a default instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


# --- Tool profiles ---


def _parse_profile_content(content: str, hint: str) -> dict[str, Any]:
    """Parse profile text as JSON first, then YAML."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Profile {hint} is neither valid JSON nor YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Profile {hint} must contain a mapping, got {type(data).__name__}")
    return data


def load_tool_profile(path: Path | str) -> ToolProfile:
    """Load and validate a tool profile from a YAML or JSON file.

    Args:
        path: Location of the profile file.

    Returns:
        The deserialised :class:`~helpforge.models.ToolProfile`.

    Raises:
        ConfigError: If the file is missing, unreadable, not a mapping, or
            fails validation.

    Example profile::

        name: podman
        parser:
          placeholders:
            CONTAINER: container
        argument_sources:
          container:
            label: Container
            expression: "(podman ps --all --format '{{.Names}}')"
    """
    path = Path(path).expanduser()
    if not path.is_file():
        raise ConfigError(f"Tool profile not found: {path}")
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read tool profile {path}: {exc}") from exc
    data = _parse_profile_content(content, str(path))
    try:
        return ToolProfile.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid tool profile {path}: {exc}") from exc


def save_tool_profile(profile: ToolProfile) -> Path:
    """Persist *profile* as YAML under the user tools directory and return its path."""
    path = get_tools_dir() / f"{profile.name}.yaml"
    data = profile.model_dump(mode="json")
    atomic_write(path, yaml.safe_dump(data, sort_keys=False))
    return path


def _user_profile_path(tool: str) -> Optional[Path]:
    for suffix in _PROFILE_SUFFIXES:
        candidate = get_tools_dir() / f"{tool}{suffix}"
        if candidate.is_file():
            return candidate
    return None


def resolve_tool_profile(tool: str, cli_profile: Optional[str] = None) -> ToolProfile:
    """Resolve the profile to use for *tool*.

    Precedence (high to low):
        1. CLI ``--profile`` path (``cli_profile``)
        2. ``HELPFORGE_PROFILE`` environment variable (path)
        3. User profile ``<config_dir>/tools/<tool>.yaml|.yml|.json``
        4. Built-in profile (see :data:`~helpforge.tools.BUILTIN_PROFILES`)
        5. :func:`~helpforge.tools.generic_profile`

    Raises:
        ConfigError: If an explicitly named profile file cannot be loaded, or
            a profile file describes a different tool.
    """
    explicit = cli_profile or os.environ.get(_PROFILE_ENV_VAR) or None
    if explicit:
        profile = load_tool_profile(explicit)
    else:
        user_path = _user_profile_path(tool)
        if user_path is not None:
            profile = load_tool_profile(user_path)
        elif tool in BUILTIN_PROFILES:
            return BUILTIN_PROFILES[tool]()
        else:
            return generic_profile(tool)

    if profile.name != tool:
        raise ConfigError(
            f"Tool profile is for '{profile.name}', not '{tool}'"
        )
    return profile
