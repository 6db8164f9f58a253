"""CLI entry point for SchemaForm."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from schemaform import __version__, logger
from schemaform.async_runner import run_async
from schemaform.dependencies import ensure_cli_dependencies
from schemaform.exceptions import FormValidationError, PackageError, SchemaLoadError, SubmissionError
from schemaform.form import FormDriver
from schemaform.logging import configure_logging
from schemaform.processing import parse_schema_text
from schemaform.settings import get_settings
from schemaform.transport import fetch_schema_text, persist_payload, submit_payload

if TYPE_CHECKING:
    from schemaform.settings import Settings
    from schemaform.typing.models import ParsedSchema

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID_FORM = 2
EXIT_SUBMISSION_FAILED = 3


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="schemaform")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    compile_parser = subparsers.add_parser(
        "compile",
        help="Compile a JSON/JSON5 schema into field descriptors and initial values",
    )
    compile_parser.add_argument("--schema", default=None, dest="schema_source")
    compile_parser.add_argument("--output", type=Path, default=None, dest="output_path")

    export_parser = subparsers.add_parser(
        "export",
        help="Apply edits, validate required fields and export the flat payload",
    )
    export_parser.add_argument("--schema", default=None, dest="schema_source")
    export_parser.add_argument("--values", type=Path, default=None, dest="values_path")
    export_parser.add_argument("--output", type=Path, default=None, dest="output_path")
    export_parser.add_argument("--submit-url", default=None, dest="submit_url")
    export_parser.add_argument("--no-submit", action="store_true", dest="no_submit")

    return parser


def _load_schema(source: str, settings: Settings) -> ParsedSchema:
    """Fetch and compile the schema; load and parse errors propagate."""
    text = run_async(fetch_schema_text(source, settings))
    return parse_schema_text(text)


def _load_edits(path: Path | None) -> dict[str, Any]:
    """Read the edited-values file.

    Raises:
        SchemaLoadError: If the file is unreadable or not a JSON object.
    """
    if path is None:
        return {}
    try:
        edits = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise SchemaLoadError(source=str(path), detail=str(exc)) from exc
    if not isinstance(edits, dict):
        raise SchemaLoadError(source=str(path), detail="edited values must be a JSON object")
    return edits


def _write_json(payload: object, output_path: Path | None) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output_path is None:
        print(text)  # noqa: T201
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")


def run_compile(args: argparse.Namespace, settings: Settings) -> int:
    """Run `schemaform compile`.

    Returns:
        int: Exit code.
    """
    ensure_cli_dependencies("compile")
    parsed = _load_schema(args.schema_source or settings.schema_source, settings)
    _write_json(
        {
            "steps": [step.model_dump(mode="json", by_alias=True, exclude_none=True) for step in parsed.steps],
            "initialValues": parsed.initial_values,
        },
        args.output_path,
    )
    logger.info("Schema compiled", extra={"field_count": len(parsed.steps)})
    return EXIT_OK


def run_export(args: argparse.Namespace, settings: Settings) -> int:
    """Run `schemaform export`.

    Returns:
        int: Exit code.
    """
    ensure_cli_dependencies("export")
    parsed = _load_schema(args.schema_source or settings.schema_source, settings)
    driver = FormDriver.from_schema(parsed, hidden_rules=settings.hidden_keys)
    try:
        driver.apply_edits(_load_edits(args.values_path))
    except ValueError as exc:
        raise SchemaLoadError(source=str(args.values_path), detail=str(exc)) from exc

    try:
        payload = driver.export()
    except FormValidationError as exc:
        logger.error("Missing required fields", extra={"errors": exc.errors})  # noqa: TRY400
        return EXIT_INVALID_FORM

    output_path = persist_payload(payload, args.output_path or Path(settings.output_path))

    submit_url = None if args.no_submit else (args.submit_url or settings.submit_url)
    if submit_url is None:
        return EXIT_OK
    try:
        receipt = run_async(submit_payload(payload, submit_url, settings))
    except SubmissionError:
        logger.exception("Submission failed; payload kept", extra={"output_path": str(output_path)})
        return EXIT_SUBMISSION_FAILED
    logger.info("Form saved and submitted", extra={"status": receipt.status, "message": receipt.message})
    return EXIT_OK


def main() -> int:
    """Run the CLI.

    Returns:
        int: Exit code.
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args()

    commands = {"compile": run_compile, "export": run_export}
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return EXIT_OK

    try:
        return command(args, settings)
    except PackageError:
        logger.exception("Command failed", extra={"command": args.command})
        return EXIT_ERROR
    except KeyboardInterrupt:
        logger.info("Command aborted by user")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
