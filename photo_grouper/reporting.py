import csv
import logging
from pathlib import Path
from typing import Iterable

from .models import Command, CreateDirectory, Rename, AdjustReference
from .paths import format_rename, reference_text


def describe_command(cmd: Command) -> str:
    """One-line, human readable form of a planned command."""
    if isinstance(cmd, CreateDirectory):
        return f"create dir {cmd.path}"
    if isinstance(cmd, Rename):
        return f"rename     {format_rename(cmd.src, cmd.dest)}"
    if isinstance(cmd, AdjustReference):
        return f"adjust ref {cmd.file} --> {reference_text(cmd.file, cmd.referenced_image)}"
    raise TypeError(f"Unknown command: {cmd!r}")


def write_plan_csv(commands: Iterable[Command], output_csv: Path) -> int:
    """
    Writes the plan to a CSV file, one row per command.
    Returns the number of rows written.
    """
    headers = ["Action", "Path", "Target", "Reference"]
    count = 0

    with open(output_csv, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(headers)

        for cmd in commands:
            if isinstance(cmd, CreateDirectory):
                row = ["create_dir", str(cmd.path), "", ""]
            elif isinstance(cmd, Rename):
                row = ["rename", str(cmd.src), str(cmd.dest), ""]
            elif isinstance(cmd, AdjustReference):
                row = ["adjust_ref", str(cmd.file), str(cmd.referenced_image),
                       reference_text(cmd.file, cmd.referenced_image)]
            else:
                raise TypeError(f"Unknown command: {cmd!r}")
            writer.writerow(row)
            count += 1

    logging.info(f"Wrote {count} planned commands to {output_csv}")
    return count
