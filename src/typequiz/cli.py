"""Command-line entry point for Type Quiz."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from typequiz.application import Application
from typequiz.bootstrap import (
    ConfigurationError,
    DependencyVerificationError,
    verify_all_dependencies,
)
from typequiz.core import (
    AppSettings,
    ServiceModule,
    configure_logging,
    load_app_settings,
)


def build_parser() -> argparse.ArgumentParser:
    """Create and configure the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Type Quiz service inspector")
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to a .env file containing configuration overrides.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="info",
        choices=["info", "services", "graph", "verify", "health"],
        help="Operation to execute.",
    )
    return parser


def execute(
    args: argparse.Namespace,
    settings: AppSettings,
    modules: Sequence[ServiceModule] = (),
) -> int:
    """Execute the requested CLI command and return the process exit code."""
    application = Application(settings, modules)
    try:
        application.initialize()
    except (ConfigurationError, DependencyVerificationError) as exc:
        print(f"Startup failed: {exc}")
        return 1
    command = args.command
    try:
        if command == "info":
            info = application.application_info()
            print(f"{info.name} {info.version}")
            print(f"Initialized: {'yes' if info.initialized else 'no'}")
            print(f"Registered services: {info.services.total_services}")
        elif command == "services":
            for name in application.container.get_service_names():
                print(name)
        elif command == "graph":
            graph = application.application_info().services.dependency_graph
            for name, dependencies in graph.items():
                print(f"{name}: {', '.join(dependencies) if dependencies else '-'}")
        elif command == "verify":
            # Startup already resolved everything when verify_on_startup is set.
            if not settings.container.verify_on_startup and not verify_all_dependencies(
                application.container
            ):
                print("Dependency verification failed.")
                return 1
            print("All services resolved.")
        elif command == "health":
            report = application.health_check()
            print(f"Status: {report.status}")
            for name, status in report.services.items():
                print(f"  {name}: {status}")
            if report.status != "healthy":
                return 1
    finally:
        application.shutdown()
    return 0


def main() -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    settings = load_app_settings(env_file=args.env_file)
    configure_logging(settings.logging)
    sys.exit(execute(args, settings))


if __name__ == "__main__":
    main()
