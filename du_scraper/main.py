from dataclasses import replace
from datetime import datetime

import click
import structlog

from du_scraper.config import HarvestConfig, load_config
from du_scraper.exceptions import ConfigurationError, ScraperError
from du_scraper.logging_setup import configure_logging
from du_scraper.models import QueryWindow
from du_scraper.scraper import Scraper
from du_scraper.sources.athletics_source import AthleticsSource
from du_scraper.sources.base_source import BaseSource
from du_scraper.sources.bulletin_source import BulletinSource
from du_scraper.sources.calendar_source import CalendarSource
from du_scraper.storage import Storage

logger = structlog.get_logger(__name__)

SOURCE_NAMES = ("athletics", "calendar", "bulletin")


def build_source(
    name: str, config: HarvestConfig, scraper: Scraper, year: int | None = None
) -> BaseSource:
    """Creates the harvester called `name` from the configuration."""
    if name == "athletics":
        return AthleticsSource(
            urls=config.athletics_urls, markers=config.markers, scraper=scraper
        )
    if name == "calendar":
        return CalendarSource(
            calendar_url=config.calendar_url,
            site_url=config.site_url,
            windows=QueryWindow.months(year or datetime.now().year),
            scraper=scraper,
        )
    if name == "bulletin":
        return BulletinSource(
            url=config.bulletin_url,
            subject=config.course_subject,
            min_number=config.min_course_number,
            scraper=scraper,
        )
    raise ConfigurationError(
        f"Unknown source: {name}",
        parameter="source",
        expected_format=" | ".join(SOURCE_NAMES),
    )


def run_source(source: BaseSource, storage: Storage) -> bool:
    """Harvests one source and writes its results.

    Returns:
        True if the output file was written.
    """
    logger.info("harvest_started", source=source.name)
    try:
        records = source.harvest()
    except ScraperError as e:
        logger.error("harvest_failed", source=source.name, **e.to_dict())
        return False

    storage.save(source.output_file, source.result_key, records)
    logger.info("harvest_completed", source=source.name, count=len(records))
    return True


def run_sources(
    ctx: click.Context, names: tuple[str, ...], year: int | None = None
) -> None:
    config: HarvestConfig = ctx.obj
    scraper = Scraper(timeout=config.timeout, retries=config.retries)
    storage = Storage(config.results_dir)

    failed = [
        name
        for name in names
        if not run_source(build_source(name, config, scraper, year), storage)
    ]
    if failed:
        logger.error("sources_without_output", sources=failed)
        ctx.exit(1)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML file overriding the default configuration",
)
@click.option("--results-dir", help="Directory receiving the JSON files")
@click.option("--timeout", type=float, help="Seconds to wait for each page")
@click.option("--log-file", help="Also write the log to this file")
@click.option("--verbose", is_flag=True, help="Log debug details")
@click.pass_context
def main(ctx, config_path, results_dir, timeout, log_file, verbose):
    """DU public page scraper"""
    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        raise click.BadParameter(e.message, param_hint="--config") from e

    if timeout is not None and timeout <= 0:
        raise click.BadParameter("Timeout must be positive.", param_hint="--timeout")

    overrides = {
        "results_dir": results_dir,
        "timeout": timeout,
        "log_file": log_file,
    }
    config = replace(config, **{k: v for k, v in overrides.items() if v is not None})

    configure_logging(verbose=verbose, log_file=config.log_file)
    ctx.obj = config


@main.command()
@click.pass_context
def athletics(ctx):
    """Athletics schedule embedded in the team site"""
    run_sources(ctx, ("athletics",))


@main.command()
@click.option("--year", type=int, help="Calendar year to harvest (default: current)")
@click.pass_context
def calendar(ctx, year):
    """University calendar events, month by month"""
    run_sources(ctx, ("calendar",), year=year)


@main.command()
@click.pass_context
def bulletin(ctx):
    """Upper-division courses without prerequisites"""
    run_sources(ctx, ("bulletin",))


@main.command(name="all")
@click.option("--year", type=int, help="Calendar year to harvest (default: current)")
@click.pass_context
def run_all(ctx, year):
    """Run every harvester"""
    run_sources(ctx, SOURCE_NAMES, year=year)


if __name__ == "__main__":
    main()
