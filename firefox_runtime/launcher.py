"""
Process launch for Firefox Runtime.

Applies a LaunchPlan: provisions desktop integration, then replaces the
current process with the browser. This is the only place with side effects
that can't be undone.
"""

import logging
import os
from typing import Callable, Mapping, Optional

from .errors import LaunchError
from .policy import LaunchPlan
from .provisioning import ProvisioningTools

logger = logging.getLogger(__name__)


def build_child_env(plan: LaunchPlan, environ: Optional[Mapping[str, str]] = None) -> dict[str, str]:
    """Merge the plan's variables over the base environment."""
    if environ is None:
        environ = os.environ
    env = dict(environ)
    env.update(plan.env)
    return env


def launch(
    plan: LaunchPlan,
    environ: Optional[Mapping[str, str]] = None,
    execve: Callable[..., None] = os.execve,
    tools: Optional[ProvisioningTools] = None,
) -> None:
    """Provision and exec the browser.

    Args:
        plan: Launch plan from plan_launch()
        environ: Base environment for the child (uses os.environ if None)
        execve: Process replacement function
        tools: Provisioning executor

    Raises:
        LaunchError: If the browser binary cannot be executed
    """
    tools = tools or ProvisioningTools()
    for result in tools.run(plan.actions):
        if not result.success:
            logger.debug("Desktop integration incomplete: %s", result.message)

    env = build_child_env(plan, environ)
    logger.debug("exec %s %s", plan.executable, plan.argv)

    try:
        execve(plan.executable, plan.argv, env)
    except (OSError, ValueError) as e:
        # ValueError: empty argv or NUL bytes in a path
        raise LaunchError(plan.executable, e) from e
