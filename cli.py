import json
import logging
import random

import click
from dotenv import load_dotenv

from services.channel_report import analyze as run_analysis
from services.config import StatsConfig, setup_logging
from services.growth_csv import growth_frame, history_frame, parse_growth_csv
from services.stats_errors import GrowthDataError
from utils.formatting import (
    format_channel_age,
    format_currency,
    format_growth_rate,
    format_number,
    parse_number,
)

# --- Load .env and setup logging once for CLI ---
load_dotenv()
setup_logging()
logger = logging.getLogger("channel_stats_cli")


def _echo_report(report):
    parsed, derived = report.parsed, report.derived
    click.echo(f"Channel:      {parsed.channel_name}")
    click.echo(f"Subscribers:  {format_number(parse_number(parsed.subscribers))}")
    click.echo(f"Total views:  {format_number(parse_number(parsed.total_views))}")
    click.echo(f"Videos:       {parsed.total_videos}")
    click.echo(f"Location:     {parsed.location}")
    click.echo(f"Avg views:    {derived.avg_views_per_video:,}")
    click.echo(f"Revenue/mo:   {format_currency(derived.estimated_monthly_revenue)}")
    click.echo(f"Channel age:  {format_channel_age(derived.channel_age_years, derived.age_known)}")
    click.echo(f"Growth rate:  {format_growth_rate(derived.growth_rate_percent)}")
    audience = ", ".join(f"{k}: {v}%" for k, v in report.audience.items())
    click.echo(f"Audience:     {audience}")
    click.echo(f"\nHistory ({report.history_source}):")
    click.echo(str(history_frame(report.history)))


@click.group()
def cli():
    """Channel statistics CLI: extract and derive metrics from channel text."""


@cli.command()
@click.argument("source", type=click.File("r"))
@click.option("--location", default=None, help="Audience country if the text has none")
@click.option("--seed", type=int, default=None, help="Seed for the synthetic history")
@click.option(
    "--growth-csv",
    type=click.File("r"),
    default=None,
    help="Monthly growth CSV to use instead of the synthetic history",
)
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
def analyze(source, location, seed, growth_csv, as_json):
    """Analyze channel statistics text from SOURCE ('-' for stdin)."""
    config = StatsConfig()
    if seed is None:
        seed = config.history_seed
    rng = random.Random(seed) if seed is not None else None

    try:
        report = run_analysis(
            source.read(),
            known_location=location,
            rng=rng,
            growth_csv=growth_csv.read() if growth_csv else None,
            config=config,
        )
    except GrowthDataError as e:
        logger.error(f"Growth CSV rejected: {e}")
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        _echo_report(report)


@cli.command("import-csv")
@click.argument("source", type=click.File("r"))
def import_csv(source):
    """Validate and display monthly growth data from SOURCE."""
    try:
        rows = parse_growth_csv(source.read())
    except GrowthDataError as e:
        raise click.ClickException(str(e))

    if not rows:
        click.echo("No rows with a month value found.")
        return
    click.echo(str(growth_frame(rows)))


if __name__ == "__main__":
    cli()
