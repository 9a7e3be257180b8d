"""
Launch policy for Firefox Runtime.

Decides, from the configuration and a snapshot of the session environment,
which variables to export, which desktop integration to provision and what
to exec. Nothing in this module touches the process environment or the
filesystem.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from .config import CONFIG_PATH_ENV, ConfigParams
from .provisioning import gnome_integration_actions, kde_integration_actions
from .schemas import ProvisionRequest


@dataclass(frozen=True)
class AmbientEnvironment:
    """Session variables read once at startup. None means unset."""

    xdg_current_desktop: Optional[str] = None
    xdg_session_type: Optional[str] = None
    wayland_display: Optional[str] = None
    moz_disable_wayland: Optional[str] = None
    home: Optional[str] = None

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> "AmbientEnvironment":
        """Snapshot the relevant variables (uses os.environ if None)."""
        if environ is None:
            environ = os.environ
        return cls(
            xdg_current_desktop=environ.get("XDG_CURRENT_DESKTOP"),
            xdg_session_type=environ.get("XDG_SESSION_TYPE"),
            wayland_display=environ.get("WAYLAND_DISPLAY"),
            moz_disable_wayland=environ.get("MOZ_DISABLE_WAYLAND"),
            home=environ.get("HOME"),
        )


@dataclass
class LaunchPlan:
    """Everything the launcher needs to start the browser."""

    executable: str
    argv: list[str]
    env: dict[str, str] = field(default_factory=dict)
    actions: list[ProvisionRequest] = field(default_factory=list)
    config_path: str = ""
    config_found: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "executable": self.executable,
            "argv": list(self.argv),
            "env": dict(self.env),
            "actions": [action.model_dump() for action in self.actions],
            "config_path": self.config_path,
            "config_found": self.config_found,
        }


def should_enable_wayland(config: ConfigParams, ambient: AmbientEnvironment) -> bool:
    """Check whether the browser should run as a native Wayland client.

    Requires Wayland to be enabled in the config, MOZ_DISABLE_WAYLAND unset
    and a known desktop, plus either GNOME with a Wayland display or a
    wayland session type.
    """
    if not config.wayland_enable or ambient.moz_disable_wayland is not None:
        return False
    desktop = ambient.xdg_current_desktop
    if desktop is None:
        return False
    if desktop == "GNOME" and ambient.wayland_display is not None:
        return True
    return ambient.xdg_session_type == "wayland"


def plan_launch(
    config: ConfigParams,
    ambient: AmbientEnvironment,
    argv: Sequence[str],
    config_path: str,
    config_found: bool = True,
) -> LaunchPlan:
    """Build the launch plan.

    Args:
        config: Loaded configuration
        ambient: Session environment snapshot
        argv: The launcher's own argument vector, passed through unchanged
        config_path: Resolved configuration path, re-exported to the child
        config_found: Whether the configuration file was read

    Returns:
        LaunchPlan with environment additions, provisioning actions and
        the command to exec
    """
    argv = list(argv)
    plan = LaunchPlan(
        executable=config.moz_path,
        argv=argv,
        config_path=config_path,
        config_found=config_found,
    )

    plan.env[CONFIG_PATH_ENV] = config_path

    if should_enable_wayland(config, ambient):
        plan.env["MOZ_ENABLE_WAYLAND"] = "1"
        plan.env["MOZ_DBUS_REMOTE"] = "1"

    desktop = ambient.xdg_current_desktop
    if ambient.home is not None:
        if config.enable_kde_integration and desktop == "KDE":
            plan.actions.extend(
                kde_integration_actions(ambient.home, config.native_messaging_path)
            )
        if config.enable_gnome_integration and desktop == "GNOME":
            plan.actions.extend(
                gnome_integration_actions(ambient.home, config.native_messaging_path)
            )

    plan.env["MOZ_APP_LAUNCHER"] = argv[0] if argv else ""

    return plan
