from contextlib import ExitStack
from pathlib import Path

import typer
from rich.console import Console

from . import __version__
from .config import EffectiveConfig, load_env_file, resolve_config
from .errors import PdfDecryptError
from .logging_utils import LOG_FILE, file_log, get_audit_logger, get_logger, mask
from .provisioner import provision
from .reporter import print_dry_run, print_summary, report_record, report_start
from .runner import decrypt_file, output_path_for
from .scanner import discover

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

app = typer.Typer(add_completion=False, invoke_without_command=True)
console = Console()


def version_callback(value: bool):
    if value:
        typer.echo(f"pdfdecrypt version {__version__}")
        raise typer.Exit()


def log_level_callback(value: str) -> str:
    if value.upper() not in LOG_LEVELS:
        raise typer.BadParameter(f"must be one of {', '.join(LOG_LEVELS)}")
    return value.upper()


@app.callback()
def main(
    password: str = typer.Option(
        None,
        "--password",
        help="PDF password (or PDF_PASSWORD in the environment / .env)",
    ),
    file: Path = typer.Option(
        None,
        "--file",
        help="Decrypt only this PDF instead of scanning PDF_SRC_DIR",
        dir_okay=False,
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="List the files that would be decrypted without decrypting them",
    ),
    summary: bool = typer.Option(
        False,
        "--summary",
        help="Print a final summary table",
    ),
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Console logging level (DEBUG, INFO, WARNING, ERROR)",
        callback=log_level_callback,
    ),
    version: bool = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
):
    """
    pdfdecrypt - decrypt every password-protected PDF in PDF_SRC_DIR into
    PDF_OUT_DIR using a bundled qpdf executable.
    """
    logger = get_logger(level=log_level)
    audit = get_audit_logger()

    with ExitStack() as stack:
        # Dry runs leave decrypt.log untouched
        if not dry_run:
            try:
                stack.enter_context(file_log(Path(LOG_FILE)))
            except OSError as e:
                logger.error(f"Cannot open {LOG_FILE}: {e}")
                raise typer.Exit(code=1)

        try:
            load_env_file(logger=logger)
            config = resolve_config(password=password, explicit_file=file, dry_run=dry_run)
            logger.debug(f"Effective configuration: {config!r}")

            binary = provision()
            logger.debug(f"Extracted qpdf to {binary.path}")

            files = discover(config.explicit_file, config.source_dir)
        except PdfDecryptError as e:
            logger.error(str(e))
            raise typer.Exit(code=1)

        if config.dry_run:
            print_dry_run(files, console)
            raise typer.Exit(code=0)

        logger.info(f"Found {len(files)} PDF files to process")
        if not files:
            console.print("[yellow]No PDF files found to process.[/yellow]")
            raise typer.Exit(code=0)

        records = process_pdfs(files, binary.path, config, logger, audit, console)

        if summary:
            print_summary(records, console)

        failed = sum(1 for r in records if not r.success)
        if failed:
            logger.warning(f"{failed} of {len(records)} files could not be decrypted")
        raise typer.Exit(code=0 if failed == 0 else 1)


def process_pdfs(files, binary_path: Path, config: EffectiveConfig, logger, audit, console):
    """Decrypt files one at a time, reporting each outcome. Returns the RunRecords."""
    logger.debug(f"Using password {mask(config.password)}")
    records = []
    for input_path in files:
        report_start(input_path, output_path_for(input_path, config.output_dir), console)
        record = decrypt_file(binary_path, config.password, input_path, config.output_dir)
        report_record(record, logger, audit)
        records.append(record)
    return records


if __name__ == "__main__":
    app()
