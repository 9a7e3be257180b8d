"""
CLI for Firefox Runtime.

`firefox-runtime` is the launcher itself: it does not parse arguments, they
are handed to the browser untouched. `firefox-runtime-plan` shows what a
launch would do without doing it.
"""

import argparse
import json
import logging
import os
import sys
from typing import Mapping, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import (
    DEFAULTS,
    ConfigParams,
    load_config,
    resolve_config_path,
    write_config,
)
from .errors import LaunchError
from .launcher import launch
from .policy import AmbientEnvironment, LaunchPlan, plan_launch

logger = logging.getLogger(__name__)

DEBUG_ENV = "FIREFOX_RUNTIME_DEBUG"


def configure_logging(environ: Optional[Mapping[str, str]] = None) -> None:
    """Send log records to stderr; verbose when FIREFOX_RUNTIME_DEBUG is set."""
    if environ is None:
        environ = os.environ
    debug = environ.get(DEBUG_ENV, "").lower() in ("1", "true", "yes")
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def build_plan(
    argv: list[str],
    environ: Mapping[str, str],
    config_path: Optional[str] = None,
) -> LaunchPlan:
    """Load the configuration and decide how to launch.

    Args:
        argv: Launcher argument vector (argv[0] included)
        environ: Environment to read session variables from
        config_path: Explicit config path (resolved from environ if None)

    Returns:
        LaunchPlan for the launcher
    """
    if config_path is None:
        config_path = resolve_config_path(environ)

    config, found = load_config(config_path)
    if not found:
        logger.warning("Cannot open config file %s. Using default values.", config_path)

    ambient = AmbientEnvironment.from_environ(environ)
    return plan_launch(config, ambient, argv, config_path, config_found=found)


def main(argv: Optional[list[str]] = None) -> int:
    """Launcher entry point.

    Args:
        argv: Full argument vector including argv[0] (uses sys.argv if None)

    Returns:
        Exit code; only returns when the browser could not be executed
    """
    if argv is None:
        argv = list(sys.argv)
    environ = os.environ

    configure_logging(environ)
    plan = build_plan(argv, environ)

    try:
        launch(plan, environ)
    except LaunchError as e:
        console = Console(stderr=True)
        console.print(f"[bold red]execv failed:[/bold red] {escape(str(e))}")
        return 1

    return 0


def create_plan_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the plan command."""
    parser = argparse.ArgumentParser(
        prog="firefox-runtime-plan",
        description="Show what firefox-runtime would do, without doing it.",
        epilog="""
Examples:
  # Inspect the launch for the current session
  firefox-runtime-plan

  # Use another configuration file
  firefox-runtime-plan --config ~/firefox-runtime.toml

  # Machine-readable output
  firefox-runtime-plan --json

  # Write a configuration file holding the defaults
  firefox-runtime-plan --write-default /etc/firefox-aurora/firefox-runtime.toml
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Firefox Runtime {__version__}",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help=f"Configuration file (default: $FIREFOX_RUNTIME_AURORA or {DEFAULTS['config_path']})",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output the plan as JSON",
    )

    parser.add_argument(
        "--write-default",
        metavar="PATH",
        type=str,
        default=None,
        help="Write a configuration file with the default values and exit",
    )

    parser.add_argument(
        "browser_args",
        nargs=argparse.REMAINDER,
        help="Arguments that would be passed to the browser",
    )

    return parser


def print_plan(plan: LaunchPlan, console: Console) -> None:
    """Render a launch plan as tables."""
    source = plan.config_path if plan.config_found else f"{plan.config_path} (not found, defaults)"
    console.print(f"[bold]Config:[/bold] {escape(source)}")
    console.print()

    env_table = Table(title="Environment")
    env_table.add_column("Variable", style="cyan")
    env_table.add_column("Value")
    for name, value in plan.env.items():
        env_table.add_row(name, escape(value))
    console.print(env_table)

    if plan.actions:
        actions_table = Table(title="Desktop Integration")
        actions_table.add_column("#", style="dim")
        actions_table.add_column("Action")
        for i, action in enumerate(plan.actions, 1):
            actions_table.add_row(str(i), escape(action.describe()))
        console.print(actions_table)
    else:
        console.print("[dim]No desktop integration for this session.[/dim]")

    console.print()
    command = " ".join([plan.executable, *plan.argv[1:]])
    console.print(f"[bold]Exec:[/bold] {escape(command)}")


def plan_main(argv: Optional[list[str]] = None) -> int:
    """Plan command entry point.

    Args:
        argv: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    parser = create_plan_parser()
    args = parser.parse_args(argv)
    console = Console()

    configure_logging()

    if args.write_default:
        try:
            path = write_config(ConfigParams(), args.write_default)
        except OSError as e:
            Console(stderr=True).print(
                f"[bold red]Cannot write {escape(args.write_default)}:[/bold red] "
                f"{escape(e.strerror or str(e))}"
            )
            return 1
        console.print(f"[green]✓[/green] Wrote {escape(str(path))}")
        return 0

    browser_args = list(args.browser_args)
    if browser_args[:1] == ["--"]:
        browser_args = browser_args[1:]
    plan = build_plan(["firefox-runtime", *browser_args], os.environ, config_path=args.config)

    if args.json:
        print(json.dumps(plan.to_dict(), indent=2))
    else:
        print_plan(plan, console)

    return 0


if __name__ == "__main__":
    sys.exit(main())
