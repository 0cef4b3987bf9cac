"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

import json
import os
from enum import Enum
from pathlib import Path

import typer

from metapkg.backends.base import Backend
from metapkg.core import registry
from metapkg.core.config import ConfigError, Settings, load_settings
from metapkg.core.errors import MetapkgError
from metapkg.core.invoker import Invoker
from metapkg.models.operation import Operation, OperationResult
from metapkg.models.package import Package, PackageFormat
from metapkg.utils.formatting import (
    console,
    create_package_table,
    err_console,
    format_package_row,
    print_error,
    print_success,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def _state(ctx: typer.Context) -> dict[str, object]:
    """Return the shared option store of the root context."""
    ctx.ensure_object(dict)
    obj: dict[str, object] = ctx.obj
    return obj


def get_settings(ctx: typer.Context) -> Settings:
    """Load settings once per invocation.

    Exits with code 1 if the settings file is invalid.
    """
    state = _state(ctx)
    settings = state.get("settings")
    if isinstance(settings, Settings):
        return settings

    try:
        settings = load_settings()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    state["settings"] = settings
    return settings


def build_invoker(ctx: typer.Context) -> Invoker:
    """Create the invoker from global options and settings.

    Echoed tool output goes to stderr so stdout stays machine readable.
    """
    settings = get_settings(ctx)
    state = _state(ctx)
    sink = err_console.out if settings.stream_output else None
    return Invoker(
        elevate=settings.elevate,
        dry_run=bool(state.get("dry_run", False)),
        sink=sink,
    )


def get_backend(ctx: typer.Context) -> Backend:
    """Resolve the backend for this invocation.

    Resolution order: ``--manager``, then the ``manager`` setting, then
    autodetection by priority.

    Exits with code 1 if no usable backend is found.
    """
    settings = get_settings(ctx)
    invoker = build_invoker(ctx)
    name = _state(ctx).get("manager") or settings.manager

    try:
        if name:
            return registry.select(str(name), invoker, settings.download_dir)
        return registry.select_default(invoker, download_dir=settings.download_dir)
    except MetapkgError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def _looks_like_path(value: str) -> bool:
    """Check whether an argument is written as a file path.

    True if it contains a path separator or ends in a package file extension.
    """
    if os.sep in value or (os.altsep is not None and os.altsep in value):
        return True
    return value.endswith(tuple(f".{fmt.extension}" for fmt in PackageFormat))


def to_package(value: str) -> Package:
    """Turn a command-line argument into a package.

    An argument written as a path to an existing file installs from that
    file; a bare name stays a package name even if such a file exists.

    Exits with code 1 if the argument names no package.
    """
    try:
        if _looks_like_path(value) and Path(value).is_file():
            return Package.from_path(value)
        return Package.from_string(value)
    except ValueError as e:
        print_error(f"Invalid package '{value}': {e}")
        raise typer.Exit(code=1) from e


def print_packages(packages: list[Package], output_format: OutputFormat, title: str) -> None:
    """Print packages as a table or as JSON."""
    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps([pkg.to_dict() for pkg in packages]))
        return

    table = create_package_table(title)
    for pkg in packages:
        table.add_row(*format_package_row(pkg))
    console.print(table)
    console.print(f"\n[muted]{len(packages)} package(s)[/]")


def report_result(result: OperationResult) -> None:
    """Print the outcome of an operation; exit with code 1 if it failed."""
    if result.failed:
        print_error(result.describe())
        raise typer.Exit(code=1)
    print_success(result.describe())


def run_package_operation(backend: Backend, operation: Operation, values: list[str]) -> None:
    """Run an install, uninstall or update for each argument in order.

    Stops at the first failure with exit code 1.
    """
    for value in values:
        package = to_package(value)
        try:
            result = backend.execute(package, operation)
        except MetapkgError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        report_result(result)
