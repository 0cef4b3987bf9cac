"""Managers command implementation.

Lists every supported package manager and whether it is usable here.
"""

import json
from typing import Annotated

import typer

from metapkg.cli.types import OutputFormat, build_invoker
from metapkg.core.registry import manager_availability
from metapkg.utils.formatting import console, create_manager_table, format_availability


def list_managers(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show supported package managers in priority order.

    Examples:
        metapkg managers                # Table of managers
        metapkg managers --format json  # Machine readable
    """
    report = manager_availability(build_invoker(ctx))

    if output_format == OutputFormat.JSON:
        data = [
            {
                "manager": manager.value,
                "name": backend.name,
                "formats": [fmt.value for fmt in backend.formats],
                "available": available,
            }
            for manager, backend, available in report
        ]
        console.print_json(json.dumps(data))
        return

    table = create_manager_table()
    for manager, backend, available in report:
        formats = ", ".join(fmt.value for fmt in backend.formats)
        table.add_row(manager.value, backend.name, formats, format_availability(available))
    console.print(table)
