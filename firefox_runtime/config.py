"""
Configuration management for Firefox Runtime.

Provides the launcher configuration dataclass and a permissive parser for the
INI-style configuration file. Parsing never fails: unreadable files, unknown
keys and malformed lines all fall back to the built-in defaults.
"""

import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

logger = logging.getLogger(__name__)

# Environment variable holding the config path (read on start, re-exported)
CONFIG_PATH_ENV = "FIREFOX_RUNTIME_AURORA"

DEFAULT_CONFIG_PATH = "/etc/firefox-aurora/firefox-runtime.toml"
DEFAULT_MOZ_PATH = "/opt/firefox-dev/firefox"
DEFAULT_NATIVE_MESSAGING_PATH = "/usr/lib64/mozilla/native-messaging-hosts/"

TRUE_VALUES = ("true", "yes", "1")


@dataclass(frozen=True)
class ConfigParams:
    """Launcher configuration, fully populated with defaults."""

    # [general]
    moz_path: str = DEFAULT_MOZ_PATH
    native_messaging_path: str = DEFAULT_NATIVE_MESSAGING_PATH

    # [wayland]
    wayland_enable: bool = True

    # [desktop]
    enable_kde_integration: bool = True
    enable_gnome_integration: bool = True

    def to_dict(self) -> dict:
        """Convert to dictionary for display and JSON output."""
        return asdict(self)


# (section, key) -> (field name, is boolean)
_KEY_MAP = {
    ("general", "moz_path"): ("moz_path", False),
    ("general", "native_messaging_path"): ("native_messaging_path", False),
    ("wayland", "enable"): ("wayland_enable", True),
    ("desktop", "enable_kde_integration"): ("enable_kde_integration", True),
    ("desktop", "enable_gnome_integration"): ("enable_gnome_integration", True),
}


def resolve_config_path(environ: Optional[Mapping[str, str]] = None) -> str:
    """Get the configuration file path.

    Args:
        environ: Environment mapping (uses os.environ if None)

    Returns:
        Value of FIREFOX_RUNTIME_AURORA if set, otherwise the default path
    """
    if environ is None:
        environ = os.environ
    path = environ.get(CONFIG_PATH_ENV)
    if path is None:
        return DEFAULT_CONFIG_PATH
    return path


def parse_boolean(value: Optional[str]) -> bool:
    """Parse a configuration boolean.

    Only "true", "yes" and "1" (case-sensitive, after trimming) are true.
    Anything else, including None and unrecognized text, is false.
    """
    if value is None:
        return False
    return value.strip() in TRUE_VALUES


def strip_quotes(value: str) -> str:
    """Remove one layer of matching single or double quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def parse_config_text(text: str) -> ConfigParams:
    """Parse configuration text into a ConfigParams.

    Args:
        text: Configuration file contents

    Returns:
        ConfigParams with recognized keys applied over the defaults
    """
    values = {}
    section = ""

    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        if line.startswith("["):
            end = line.find("]")
            if end != -1:
                section = line[1:end]
            continue

        key, sep, value = line.partition("=")
        if not sep:
            continue

        target = _KEY_MAP.get((section, key.strip()))
        if target is None:
            continue

        field_name, is_bool = target
        value = strip_quotes(value.strip())
        values[field_name] = parse_boolean(value) if is_bool else value

    return ConfigParams(**values)


def load_config(path: Union[str, Path]) -> tuple[ConfigParams, bool]:
    """Load the launcher configuration.

    Args:
        path: Path to the configuration file

    Returns:
        Tuple of (config, found). When the file cannot be read the default
        configuration is returned with found=False.
    """
    try:
        with open(path, "r", encoding="utf-8", errors="surrogateescape") as f:
            text = f.read()
    except OSError as e:
        logger.debug("Failed to read config %s: %s", path, e)
        return ConfigParams(), False

    return parse_config_text(text), True


def dump_config(params: ConfigParams) -> str:
    """Render a ConfigParams in the configuration file format."""

    def _bool(value: bool) -> str:
        return "true" if value else "false"

    return (
        "# Firefox Runtime configuration\n"
        "\n"
        "[general]\n"
        f'moz_path = "{params.moz_path}"\n'
        f'native_messaging_path = "{params.native_messaging_path}"\n'
        "\n"
        "[wayland]\n"
        f"enable = {_bool(params.wayland_enable)}\n"
        "\n"
        "[desktop]\n"
        f"enable_kde_integration = {_bool(params.enable_kde_integration)}\n"
        f"enable_gnome_integration = {_bool(params.enable_gnome_integration)}\n"
    )


def write_config(params: ConfigParams, path: Union[str, Path]) -> Path:
    """Write a configuration file.

    Args:
        params: Configuration to write
        path: Destination file (parent directories are created)

    Returns:
        Path to the written file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_config(params), encoding="utf-8", errors="surrogateescape")
    return path


# Default configuration values for documentation
DEFAULTS = {
    "config_path": DEFAULT_CONFIG_PATH,
    "moz_path": DEFAULT_MOZ_PATH,
    "native_messaging_path": DEFAULT_NATIVE_MESSAGING_PATH,
    "wayland_enable": True,
    "enable_kde_integration": True,
    "enable_gnome_integration": True,
}
