"""
Desktop integration provisioning for Firefox Runtime.

Links native messaging host manifests (KDE Plasma browser integration,
GNOME browser connector) into ~/.mozilla/native-messaging-hosts so the
desktop shell can talk to the browser extension.

Provisioning is best-effort: failures are reported as ToolResults and logged,
never raised, so a broken integration can't keep the browser from starting.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from .schemas import EnsureDirRequest, ProvisionRequest, SymlinkRequest

logger = logging.getLogger(__name__)

KDE_MANIFESTS = ("org.kde.plasma.browser_integration.json",)
GNOME_MANIFESTS = (
    "org.gnome.browser_connector.json",
    "org.gnome.chrome_gnome_shell.json",
)


def get_mozilla_dir(home: str) -> str:
    """Get the per-user Mozilla directory."""
    return f"{home}/.mozilla"


def get_native_hosts_dir(home: str) -> str:
    """Get the per-user native messaging hosts directory."""
    return f"{get_mozilla_dir(home)}/native-messaging-hosts"


def manifest_actions(
    home: str,
    native_messaging_path: str,
    manifests: Iterable[str],
) -> list[ProvisionRequest]:
    """Build the actions that link manifests into the user's hosts directory.

    Args:
        home: User home directory
        native_messaging_path: System manifest directory prefix, including
            its trailing separator
        manifests: Manifest file names to link

    Returns:
        Directory requests followed by one symlink request per manifest
    """
    hosts_dir = get_native_hosts_dir(home)
    try:
        actions: list[ProvisionRequest] = [
            EnsureDirRequest(path=get_mozilla_dir(home)),
            EnsureDirRequest(path=hosts_dir),
        ]
        for name in manifests:
            actions.append(SymlinkRequest(
                source=f"{native_messaging_path}{name}",
                destination=f"{hosts_dir}/{name}",
            ))
    except ValidationError as e:
        # Paths carrying undecodable bytes; integration is optional
        logger.debug("Skipping desktop integration: %s", e)
        return []
    return actions


def kde_integration_actions(home: str, native_messaging_path: str) -> list[ProvisionRequest]:
    """Actions for KDE Plasma browser integration."""
    return manifest_actions(home, native_messaging_path, KDE_MANIFESTS)


def gnome_integration_actions(home: str, native_messaging_path: str) -> list[ProvisionRequest]:
    """Actions for the GNOME Shell browser connector."""
    return manifest_actions(home, native_messaging_path, GNOME_MANIFESTS)


@dataclass
class ToolResult:
    """Result of a provisioning action."""

    success: bool
    message: str
    data: Optional[Any] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {
            "success": self.success,
            "message": self.message,
        }
        if self.data is not None:
            result["data"] = self.data
        return result


class ProvisioningTools:
    """Executes provisioning requests against the local filesystem."""

    def execute_typed(self, request: ProvisionRequest) -> ToolResult:
        """Execute a single provisioning request.

        Args:
            request: Typed request object

        Returns:
            ToolResult describing what happened. OS errors are captured,
            not raised.
        """
        if isinstance(request, EnsureDirRequest):
            handler = self._ensure_dir
        elif isinstance(request, SymlinkRequest):
            handler = self._symlink
        else:
            return ToolResult(
                success=False,
                message=f"Unknown request type: {type(request).__name__}",
            )

        try:
            result = handler(request)
        except OSError as e:
            result = ToolResult(
                success=False,
                message=f"Error executing {request.describe()}: {e.strerror or e}",
            )

        if result.success:
            logger.debug("%s: %s", request.describe(), result.message)
        else:
            logger.debug("Provisioning failed: %s", result.message)
        return result

    def run(self, actions: Iterable[ProvisionRequest]) -> list[ToolResult]:
        """Execute requests in order, continuing past failures."""
        return [self.execute_typed(action) for action in actions]

    def _ensure_dir(self, request: EnsureDirRequest) -> ToolResult:
        if os.path.exists(request.path):
            return ToolResult(success=True, message="already exists", data={"created": False})

        os.mkdir(request.path, request.mode)
        return ToolResult(success=True, message="created", data={"created": True})

    def _symlink(self, request: SymlinkRequest) -> ToolResult:
        if not os.path.exists(request.source):
            return ToolResult(
                success=True,
                message=f"source {request.source} missing, skipped",
                data={"created": False},
            )

        if os.path.lexists(request.destination):
            return ToolResult(success=True, message="already present", data={"created": False})

        os.symlink(request.source, request.destination)
        return ToolResult(success=True, message="created", data={"created": True})
