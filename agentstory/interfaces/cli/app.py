"""agentstory CLI application.

Commands:
    validate: Validate an Agent Story document (JSON or YAML)
    validate-skill: Validate a single Skill document
    export: Validate a story and write harness files
    adapters: List registered harness adapters
    serve: Run the HTTP API

Usage:
    agentstory validate story.yaml
    agentstory validate draft.json --partial --json
    agentstory export story.yaml --adapter claude --adapter letta --out build/
    agentstory adapters --story story.yaml

Exit codes:
    0  success / document valid
    1  document invalid, or the command failed
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import click
import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from agentstory import __version__
from agentstory.config.settings import get_settings
from agentstory.core.exceptions import AgentStoryError, ConfigurationError, StoryValidationError
from agentstory.export.registry import export_story, get_default_registry
from agentstory.interfaces.cli.logging import setup_cli_logging
from agentstory.schemas.story import AgentStory
from agentstory.validation.completeness import get_story_completeness
from agentstory.validation.result import ValidationResult
from agentstory.validation.validator import StoryValidator


# =============================================================================
# Module Logger
# =============================================================================

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# ANSI color codes for terminal output
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
}

YAML_SUFFIXES = {".yaml", ".yml"}


def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text."""
    if not sys.stdout.isatty():
        return text
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


# =============================================================================
# Helpers
# =============================================================================


def load_document(path: Path) -> Any:
    """Read a JSON or YAML document.

    ``.yaml``/``.yml`` files are read with ``yaml.safe_load``, everything
    else as JSON.

    Raises:
        click.ClickException: If the file cannot be parsed.
    """
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            return yaml.safe_load(text)
        return json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise click.ClickException(f"Could not parse {path}: {e}") from e


def _resolve_strict(strict: Optional[bool]) -> bool:
    return get_settings().validation.strict if strict is None else strict


def _echo_result(result: ValidationResult, label: str) -> None:
    """Print a validation result for humans."""
    max_issues = get_settings().validation.max_issues

    if result.valid:
        click.echo(f"{colorize('VALID', 'green')}  {label}")
    else:
        click.echo(f"{colorize('INVALID', 'red')}  {label}")

    if result.errors:
        click.echo()
        click.echo(colorize(f"Errors ({len(result.errors)}):", "bold"))
        for i, error in enumerate(result.errors[:max_issues], 1):
            click.echo(f"  {i}. {error}")
        if len(result.errors) > max_issues:
            click.echo(colorize(f"  ... and {len(result.errors) - max_issues} more", "dim"))

    if result.warnings:
        click.echo()
        click.echo(colorize(f"Warnings ({len(result.warnings)}):", "bold"))
        for i, warning in enumerate(result.warnings[:max_issues], 1):
            click.echo(f"  {i}. {colorize(str(warning), 'yellow')}")
        if len(result.warnings) > max_issues:
            click.echo(colorize(f"  ... and {len(result.warnings) - max_issues} more", "dim"))


def _fail(error: AgentStoryError) -> None:
    """Report a toolkit error and exit with status 1."""
    click.echo(colorize(f"ERROR: {error}", "red"), err=True)
    if isinstance(error, StoryValidationError) and error.result is not None:
        click.echo(error.result.get_error_summary(), err=True)
    raise SystemExit(1)


# =============================================================================
# CLI Application
# =============================================================================


@click.group()
@click.version_option(version=__version__, prog_name="agentstory")
@click.option("--debug/--no-debug", default=False, help="Enable debug output")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write JSON Lines logs to this file",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, log_file: Optional[Path]) -> None:
    """agentstory - validate and export Agent Stories.

    An Agent Story describes one AI agent: its identity, autonomy, skills,
    human oversight and guardrails.
    """
    env_file = Path(".env")
    if env_file.exists():
        load_dotenv(env_file, override=False)

    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug

    try:
        settings = get_settings()
    except ValidationError as e:
        _fail(ConfigurationError("Invalid AGENTSTORY_ settings", validation_details=str(e)))
        return

    level = logging.DEBUG if debug else settings.log_level
    setup_cli_logging(level=level, log_file=log_file)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--partial",
    is_flag=True,
    help="Validate as a draft: top-level sections other than the name may be missing",
)
@click.option(
    "--strict/--no-strict",
    default=None,
    help=(
        "Opt in to failing on consistency warnings. By default warnings never "
        "block a valid document (default from AGENTSTORY_VALIDATION__STRICT)"
    ),
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def validate(file: Path, partial: bool, strict: Optional[bool], as_json: bool) -> None:
    """Validate an Agent Story document.

    Example:
        agentstory validate support-bot.yaml
    """
    document = load_document(file)
    validator = StoryValidator(strict_mode=_resolve_strict(strict))
    if partial:
        result = validator.validate_partial_story(document)
    else:
        result = validator.validate_story(document)

    logger.debug("Validated %s", file, extra={"command": "validate", "path": str(file)})

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        story = result.data
        label = f"{file} ({story.name})" if isinstance(story, AgentStory) else str(file)
        _echo_result(result, label)
        if isinstance(story, AgentStory) and not partial:
            completeness = get_story_completeness(story)
            click.echo()
            if completeness.complete:
                click.echo(f"{colorize('Completeness:', 'bold')} complete")
            else:
                click.echo(
                    f"{colorize('Completeness:', 'bold')} incomplete "
                    f"(missing: {', '.join(completeness.missing)})"
                )

    if not result.valid:
        raise SystemExit(1)


@cli.command("validate-skill")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Opt in to failing on consistency warnings. By default warnings never block a valid skill",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def validate_skill_command(file: Path, strict: Optional[bool], as_json: bool) -> None:
    """Validate a single Skill document."""
    document = load_document(file)
    result = StoryValidator(strict_mode=_resolve_strict(strict)).validate_skill(document)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _echo_result(result, str(file))

    if not result.valid:
        raise SystemExit(1)


def _write_files(out_dir: Path, files: list[tuple[str, str]]) -> list[Path]:
    """Write ``(relative_path, content)`` pairs below ``out_dir``.

    Paths that would land outside ``out_dir`` are skipped.
    """
    root = out_dir.resolve()
    written: list[Path] = []
    for relative, content in files:
        target = (root / relative).resolve()
        if root != target and root not in target.parents:
            logger.warning("Skipping %s: path escapes the output directory", relative)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        written.append(target)
    return written


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--adapter", "-a", "adapter_ids",
    multiple=True,
    help="Harness adapter ID (repeatable). Defaults to every compatible adapter.",
)
@click.option(
    "--out", "-o", "out_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Output directory (default from AGENTSTORY_EXPORT__OUTPUT_DIR)",
)
@click.option(
    "--include-source/--no-include-source",
    default=None,
    help="Also write story.json (default from AGENTSTORY_EXPORT__INCLUDE_SOURCE)",
)
@click.option("--json", "as_json", is_flag=True, help="Print a JSON summary")
def export(
    file: Path,
    adapter_ids: tuple[str, ...],
    out_dir: Optional[Path],
    include_source: Optional[bool],
    as_json: bool,
) -> None:
    """Validate a story and write harness files.

    Example:
        agentstory export support-bot.yaml -a claude -a agentskills --out build/
    """
    settings = get_settings()
    out_dir = out_dir or settings.export.output_dir
    ids = list(adapter_ids) or list(settings.export.default_adapters) or None
    if include_source is None:
        include_source = settings.export.include_source

    document = load_document(file)
    try:
        result = export_story(document, adapter_ids=ids, include_source=include_source)
    except AgentStoryError as e:
        _fail(e)
        return

    files = [(f.path, f.content) for f in result.all_files()]
    if result.source is not None:
        files.append(("story.json", result.source))
    written = _write_files(out_dir, files)

    logger.debug(
        "Wrote %d file(s) to %s",
        len(written),
        out_dir,
        extra={"command": "export", "adapter_ids": list(result.outputs)},
    )

    if as_json:
        click.echo(json.dumps({
            "outDir": str(out_dir),
            "adapters": list(result.outputs),
            "files": [str(p) for p in written],
            "warnings": result.warnings,
        }, indent=2))
        return

    for adapter_id, output in result.outputs.items():
        click.echo(colorize(f"{adapter_id} ({len(output.files)} file(s))", "cyan"))
        for harness_file in output.files:
            click.echo(f"  {out_dir / harness_file.path}")
    if result.source is not None:
        click.echo(f"  {out_dir / 'story.json'}")

    if result.warnings:
        click.echo()
        click.echo(colorize(f"Warnings ({len(result.warnings)}):", "bold"))
        for warning in result.warnings:
            click.echo(f"  - {colorize(warning, 'yellow')}")


@cli.command()
@click.option(
    "--story", "story_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Also show each adapter's compatibility with this story",
)
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
def adapters(story_file: Optional[Path], as_json: bool) -> None:
    """List registered harness adapters."""
    registry = get_default_registry()
    compatibility = None
    if story_file is not None:
        result = StoryValidator().validate_story(load_document(story_file))
        if not result.valid:
            _fail(StoryValidationError(f"{story_file} is not a valid story", result=result))
            return
        compatibility = registry.check_all_compatibility(result.data)

    if as_json:
        entries = []
        for info in registry.info_list():
            entry = info.to_dict()
            if compatibility is not None:
                entry["compatibility"] = compatibility[info.id].to_dict()
            entries.append(entry)
        click.echo(json.dumps(entries, indent=2))
        return

    for info in registry.info_list():
        click.echo(f"{colorize(info.id, 'bold'):<12} {info.name} - {info.description}")
        if compatibility is not None:
            compat = compatibility[info.id]
            status = colorize("compatible", "green") if compat.compatible else colorize("incompatible", "red")
            click.echo(f"    {status}")
            for warning in compat.warnings:
                click.echo(f"    - {warning}")
            for missing in compat.missing_features:
                click.echo(f"    - missing: {missing}")


@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--port", default=8000, show_default=True, type=int, help="Port")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str, port: int, reload: bool) -> None:
    """Run the validation HTTP API with uvicorn."""
    from agentstory.interfaces.api.server import run_server

    run_server(host=host, port=port, reload=reload)


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
