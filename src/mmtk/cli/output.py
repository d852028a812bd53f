"""CLI output formatting for JSON and human-readable output."""

from __future__ import annotations

import json
import sys
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any, NoReturn

import click

from mmtk.cli.exit_codes import ExitCode
from mmtk.domain.models import OperationResult
from mmtk.operations import DRY_RUN_WARNING


def _to_jsonable(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return _to_jsonable(asdict(value))
    if isinstance(value, dict):
        return {str(k): _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def result_to_dict(result: OperationResult[Any]) -> dict[str, Any]:
    """Serialize an OperationResult for JSON output."""
    output: dict[str, Any] = {
        "status": "completed" if result.success else "failed",
    }
    if result.success:
        output["data"] = _to_jsonable(result.data)
    else:
        output["error"] = result.error
    if result.warnings:
        output["warnings"] = list(result.warnings)
    return output


def error_exit(
    message: str,
    code: ExitCode | int,
    json_output: bool = False,
) -> NoReturn:
    """Print an error and exit with code."""
    if isinstance(code, ExitCode):
        code_name = code.name
        exit_value = int(code)
    else:
        code_name = "UNKNOWN_ERROR"
        exit_value = code

    if json_output:
        click.echo(
            json.dumps(
                {"status": "failed", "error": {"code": code_name, "message": message}}
            ),
            err=True,
        )
    else:
        click.echo(f"Error: {message}", err=True)

    sys.exit(exit_value)


def warning_output(message: str, json_output: bool = False) -> None:
    """Print a warning; JSON output carries warnings in the document instead."""
    if not json_output:
        click.echo(f"Warning: {message}", err=True)


def _echo_commands(commands: list[str] | tuple[str, ...]) -> None:
    for command in commands:
        click.echo(command)


def report_result(
    result: OperationResult[Any],
    json_output: bool = False,
    dry_run: bool = False,
) -> None:
    """Print an operation result and exit non-zero on failure.

    Dry runs print the compiled command(s), one per line. Real runs print
    the output path(s).
    """
    if json_output:
        click.echo(json.dumps(result_to_dict(result), indent=2))
        if not result.success:
            sys.exit(ExitCode.OPERATION_FAILED)
        return

    if not result.success:
        error_exit(result.error or "Operation failed", ExitCode.OPERATION_FAILED)

    data = result.data
    commands = getattr(data, "commands", None)
    single_command = getattr(data, "command", None)

    if dry_run:
        if commands is not None:
            _echo_commands(commands)
        elif single_command is not None:
            click.echo(single_command)
    else:
        outputs = getattr(data, "outputs", None)
        output_path = getattr(data, "output_path", None)
        if outputs is not None:
            for path in outputs:
                click.echo(f"Created: {path}")
        elif output_path is not None:
            click.echo(f"Created: {output_path}")

    for warning in result.warnings:
        if dry_run and warning == DRY_RUN_WARNING:
            continue
        warning_output(warning)
