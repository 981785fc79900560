"""CLI for the agentstory toolkit.

CLI Commands:
    agentstory validate <file>          Validate a story (JSON or YAML)
    agentstory validate-skill <file>    Validate a single skill
    agentstory export <file>            Export a story to harness files
    agentstory adapters                 List harness adapters
    agentstory serve                    Run the HTTP API

Key Components:
    - cli: Main CLI application (click-based)
    - setup_cli_logging: console and JSON Lines logging
"""

from agentstory.interfaces.cli.app import (
    cli,
    main,
    colorize,
    load_document,
)

from agentstory.interfaces.cli.logging import (
    StoryLogFormatter,
    JsonLinesFormatter,
    setup_cli_logging,
    reset_cli_logging,
    CLI_LOG_MAX_BYTES,
    CLI_LOG_BACKUP_COUNT,
)


__all__ = [
    # CLI application
    "cli",
    "main",
    "colorize",
    "load_document",

    # CLI Logging
    "StoryLogFormatter",
    "JsonLinesFormatter",
    "setup_cli_logging",
    "reset_cli_logging",
    "CLI_LOG_MAX_BYTES",
    "CLI_LOG_BACKUP_COUNT",
]
