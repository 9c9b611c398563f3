"""Will-call list CLI."""

from pathlib import Path
from typing import Dict, Optional

import click
import structlog

from .config import DEFAULT_OUTPUT, GROUPON_REQUIRE_PURCHASED, LOG_LEVEL, OUTPUT_ENCODING
from .logging_config import configure
from .pipeline import SOURCES, Export, build_will_call, render_will_call_csv

logger = structlog.get_logger()

_LABELS = {
    "bpt": "BPT",
    "gs": "GoldStar",
    "groupon": "Groupon",
    "bpt_season": "BPT Season",
    "groupon_season": "Groupon Season",
    "extra": "Extra",
}

_InputPath = click.Path(exists=True, dir_okay=False, path_type=Path)


@click.command()
@click.option("--bpt", type=_InputPath, required=True, help="Brown Paper Tickets CSV file.")
@click.option("--gs", type=_InputPath, required=True, help="GoldStar CSV file.")
@click.option("--groupon", type=_InputPath, required=True, help="Groupon CSV file.")
@click.option("--bpt-season", type=_InputPath, default=None, help="Brown Paper Tickets season passes CSV file.")
@click.option("--groupon-season", type=_InputPath, default=None, help="Groupon season passes CSV file.")
@click.option("--extra", type=_InputPath, default=None, help="Extra entries such as reserved tickets.")
@click.option("--out", type=click.Path(dir_okay=False, path_type=Path), default=DEFAULT_OUTPUT,
              show_default=True, help="Output file.")
@click.option("--groupon-require-purchased/--groupon-allow-unpurchased", default=GROUPON_REQUIRE_PURCHASED,
              show_default=True, help="Only accept Groupon vouchers marked Purchased.")
@click.option("--log-level", default=LOG_LEVEL, show_default=True, help="Logging level.")
def main(
    bpt: Path,
    gs: Path,
    groupon: Path,
    bpt_season: Optional[Path],
    groupon_season: Optional[Path],
    extra: Optional[Path],
    out: Path,
    groupon_require_purchased: bool,
    log_level: str,
):
    """Merge box-office exports into a single will-call list."""
    configure(log_level)

    paths = {
        "bpt": bpt,
        "gs": gs,
        "groupon": groupon,
        "bpt_season": bpt_season,
        "groupon_season": groupon_season,
        "extra": extra,
    }

    exports: Dict[str, Optional[Export]] = {}
    for spec in SOURCES:
        path = paths[spec.key]
        label = _LABELS[spec.key]
        if path is None:
            click.echo(f"INFO: No {label} File")
            exports[spec.key] = None
            continue
        click.echo(f"Reading {label} File: {path}")
        exports[spec.key] = Export.from_bytes(path.read_bytes(), filename=path.name)

    click.echo(f"Output file: {out}")

    records, report = build_will_call(exports, groupon_require_purchased=groupon_require_purchased)
    for source in report.sources:
        click.echo(f"  {source.source}: {source.rows} rows")
    if report.summary.warnings:
        click.echo(f"  {report.summary.warnings} warnings (see log)")

    with open(out, "w", encoding=OUTPUT_ENCODING, newline="") as f:
        f.write(render_will_call_csv(records))

    click.echo(f"Wrote {len(records)} rows to {out}")
