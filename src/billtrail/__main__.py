"""CLI entry point for billtrail."""

import logging
import sys
from pathlib import Path

import click

from .adapters.storage import SqliteBillStore
from .config import load_settings
from .domain.errors import ErrorKind, PipelineError
from .domain.models import BillRecord, ProcessingOutcome
from .scheduler import create_orchestrator, create_record_extractor, run_scheduler

EXIT_FAILURES = 1
EXIT_CONFIGURATION = 2


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def format_outcome(outcome: ProcessingOutcome) -> list[str]:
    """Render an outcome as CLI lines, failures last."""
    lines = [
        f"found: {outcome.files_found}",
        f"processed: {outcome.processed}",
        f"skipped: {outcome.skipped}",
        f"failed: {outcome.failed}",
    ]
    if outcome.cancelled:
        lines.append("cancelled: true")
    lines.extend(f"✗ {message}" for message in outcome.failure_messages)
    return lines


def format_record(record: BillRecord) -> list[str]:
    consumption = record.consumption
    financial = record.financial
    return [
        f"period: {record.period}",
        f"month: {record.month}",
        f"year: {record.year}",
        f"offered: {record.is_offered_period}",
        f"total_units: {consumption.total_units}",
        f"base_price: {consumption.base_price}",
        f"discount_value: {consumption.discount_value}",
        f"price_after_discount: {consumption.price_after_discount}",
        f"energy_value: {financial.energy_value}",
        f"taxes_and_fees: {financial.taxes_and_fees}",
        f"total_amount: {financial.total_amount}",
    ]


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("-c", "--config", type=click.Path(exists=True), help="Config file path")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """Billtrail - utility bill scraper."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config) if config else None


@cli.command()
@click.argument("folder", type=click.Path(path_type=Path))
@click.option("--pattern", help="Glob pattern for bill files (default from config)")
@click.pass_context
def process(ctx: click.Context, folder: Path, pattern: str | None) -> None:
    """Process all bills in FOLDER once."""
    settings = load_settings(ctx.obj["config_path"])
    orchestrator = create_orchestrator(settings)

    try:
        outcome = orchestrator.process(
            folder, pattern or settings.processing.file_pattern
        )
    except PipelineError as e:
        click.echo(f"Error: {e.describe()}", err=True)
        code = EXIT_CONFIGURATION if e.kind is ErrorKind.CONFIGURATION else EXIT_FAILURES
        sys.exit(code)

    for line in format_outcome(outcome):
        click.echo(line, err=line.startswith("✗"))

    if outcome.failed:
        sys.exit(EXIT_FAILURES)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def extract(ctx: click.Context, file: Path) -> None:
    """Extract a single bill without storing it."""
    settings = load_settings(ctx.obj["config_path"])
    extractor = create_record_extractor(settings)

    try:
        record = extractor.extract_record(file)
    except PipelineError as e:
        click.echo(f"Errors: {e.describe()}", err=True)
        sys.exit(EXIT_FAILURES)

    for line in format_record(record):
        click.echo(line)


@cli.command()
@click.option("--year", type=int, help="Only bills of this year")
@click.pass_context
def bills(ctx: click.Context, year: int | None) -> None:
    """List stored bills."""
    settings = load_settings(ctx.obj["config_path"])
    store = SqliteBillStore(settings.paths.database)

    stored = store.get_bills_by_year(year) if year else store.get_all_bills()
    if not stored:
        click.echo("No bills stored")
        return

    for bill in stored:
        click.echo(f"{bill.summary()}  [{Path(bill.file_path).name}]")
    click.echo(f"\nTotal: {len(stored)} of {store.get_total_count()} bills")


@cli.command()
@click.pass_context
def schedule(ctx: click.Context) -> None:
    """Run the periodic processing daemon."""
    settings = load_settings(ctx.obj["config_path"])
    run_scheduler(settings)


if __name__ == "__main__":
    cli()
