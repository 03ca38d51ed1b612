"""Package entry point - composition root. Wire dependencies and run the CLI app."""

import logging
import os

from rich.logging import RichHandler

from stratify_remediator.infrastructure.di.container import StratifyContainer
from stratify_remediator.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    level = getattr(logging, os.environ.get("STRATIFY_LOG_LEVEL", "WARNING").upper(), logging.WARNING)
    logging.basicConfig(
        level=level if isinstance(level, int) else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )

    container = StratifyContainer()
    deps = CLIDependencies(
        load_config=container.load_config,
        find_project_root=container.find_project_root,
        telemetry=container.get_telemetry_port(),
        reporter=container.get_reporter(),
        json_reporter=container.get_json_reporter(),
        filesystem=container.get_filesystem_gateway(),
        pom=container.get_pom_gateway(),
        scanner=container.get_module_scanner(),
        java_source=container.get_java_source_gateway(),
        fixer_registry=container.get_fixer_registry(),
        backup_strategies=container.get_backup_strategies(),
        rule_registry=container.get_rule_registry(),
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
