import logging
from pathlib import Path
from typing import Iterable, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .runner import RunRecord


def print_dry_run(files: Sequence[Path], console: Console):
    """List the files a real run would decrypt."""
    console.print("Dry-run mode: files that would be decrypted:")
    for path in files:
        console.print(f" - {escape(str(path))}", soft_wrap=True)


def report_start(input_path: Path, output_path: Path, console: Console):
    console.print(
        f"Decrypting [blue]{escape(str(input_path))}[/blue] → {escape(str(output_path))}",
        soft_wrap=True,
    )


def format_record(record: RunRecord) -> str:
    """Render a RunRecord as a single log line."""
    if record.success:
        return (
            f"SUCCESS: {record.input_path} → {record.output_path} "
            f"(duration: {record.duration:.3f}s)"
        )
    return (
        f"ERROR: {record.input_path} → {record.output_path} : {record.error_detail} "
        f"(duration: {record.duration:.3f}s)"
    )


def report_record(record: RunRecord, logger: logging.Logger, audit: logging.Logger):
    """
    Record the outcome of one file.

    Successes go to the audit logger (log file only); failures go to the
    console logger, which also writes to the log file.
    """
    if record.success:
        audit.info(format_record(record))
    else:
        logger.error(format_record(record))


def print_summary(records: Iterable[RunRecord], console: Console):
    """Print a summary table of the run results."""
    records = list(records)
    succeeded = sum(1 for r in records if r.success)
    failed = len(records) - succeeded
    total_time = sum(r.duration for r in records)

    table = Table(title="Decryption Summary")

    table.add_column("Status", style="cyan")
    table.add_column("Count", style="magenta")
    table.add_column("Description", style="green")

    table.add_row("Processed", str(len(records)), "Total PDF files attempted")
    table.add_row("Decrypted", str(succeeded), "Files written to the output directory")
    table.add_row("Failed", str(failed), "Files qpdf could not decrypt")
    table.add_row("Time", f"{total_time:.2f}s", "Total time spent in qpdf")

    console.print(table)
