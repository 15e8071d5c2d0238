"""Typer based command line entry point for jsontoxlsx."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from jsontoxlsx.config import MergeOptions, load_options
from jsontoxlsx.merge import merge_files
from jsontoxlsx.utils.log import configure_logging, get_logger

USAGE = "Usage: json-to-xlsx json template excel"

app = typer.Typer(help="Merge JSON into an Excel template.", add_completion=False)


@app.command()
def main(
    args: Optional[List[str]] = typer.Argument(
        None, metavar="JSON TEMPLATE OUTPUT", help="JSON input, template workbook, output workbook."
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", help="YAML file with merge options."
    ),
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Merge a JSON object or array into the first sheet of an .xlsx template."""

    if not args or len(args) != 3:
        typer.echo(USAGE, err=True)
        raise typer.Exit(code=1)

    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")
    options = load_options(config) if config else MergeOptions()
    log_path = configure_logging(level_value, options.log_dir)
    logger = get_logger("cli")
    logger.debug("Logging to file", extra={"log_file": str(log_path)})

    json_path, template_path, out_path = (Path(arg) for arg in args)
    result = merge_files(json_path, template_path, out_path, options)
    logger.info(
        "Merge finished",
        extra={"mode": result.mode, "rows_written": result.rows_written},
    )


if __name__ == "__main__":  # pragma: no cover
    app()
