"""CLI commands for census-summary."""

import logging
from pathlib import Path
from typing import Optional

import click
import pandas as pd

from census_summary import (
    CensusSummary,
    CensusSummaryError,
    DatasetKind,
    Settings,
    search_cbsa,
    search_fips,
    search_geocomponents,
    search_summarylevels,
    search_tablecontents,
)
from census_summary.utils.fips import get_state_name, normalize_state

DATASET_CHOICES = [kind.value for kind in DatasetKind]


def _echo_frame(frame: pd.DataFrame) -> None:
    if frame.empty:
        click.echo("No rows found.")
    else:
        click.echo(frame.to_string(index=False))


def _keyword(words: tuple[str, ...]) -> Optional[str]:
    return " ".join(words) if words else None


@click.group()
@click.version_option(package_name="census-summary")
@click.option(
    "--data-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the summary files (defaults to PATH_TO_CENSUS)",
)
@click.option("--verbose", "-v", count=True, help="Log more (-v info, -vv debug)")
@click.pass_context
def cli(ctx: click.Context, data_root: Optional[Path], verbose: int):
    """Census-summary: Read census summary files into tables."""
    settings = Settings()
    if verbose:
        level = logging.DEBUG if verbose > 1 else logging.INFO
    else:
        level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["data_root"] = data_root


def _census(ctx: click.Context) -> CensusSummary:
    return CensusSummary(data_root=ctx.obj["data_root"], settings=ctx.obj["settings"])


@cli.command()
@click.option("--dataset", "-d", required=True, type=click.Choice(DATASET_CHOICES))
@click.option("--year", "-y", required=True, type=int)
@click.option("--state", "-s", "states", multiple=True, required=True, help="State abbreviation (repeatable)")
@click.option(
    "--content",
    "-c",
    "contents",
    multiple=True,
    help="Table content, optionally 'name = reference' (repeatable)",
)
@click.option("--area", "-a", "areas", multiple=True, help="Area specifier (repeatable)")
@click.option("--geo-header", "-g", "geo_headers", multiple=True, help="Geo header (repeatable)")
@click.option("--summary-level", "-l", default="*", help="Summary level alias or code")
@click.option("--geo-comp", default="total", help="Geographic component alias or code")
@click.option("--margin", is_flag=True, help="Include margins of error")
@click.option("--raw-geoheaders", is_flag=True, help="Include geo headers as found in the geography file")
@click.option("--no-population", is_flag=True, help="Do not add total population")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write CSV or parquet")
@click.pass_context
def read(
    ctx: click.Context,
    dataset: str,
    year: int,
    states: tuple[str, ...],
    contents: tuple[str, ...],
    areas: tuple[str, ...],
    geo_headers: tuple[str, ...],
    summary_level: str,
    geo_comp: str,
    margin: bool,
    raw_geoheaders: bool,
    no_population: bool,
    output: Optional[Path],
):
    """Read summary data of selected areas or geo headers."""
    try:
        result = _census(ctx).read_survey(
            dataset,
            year,
            list(states),
            table_contents=list(contents),
            areas=list(areas),
            geo_headers=list(geo_headers),
            summary_level=summary_level,
            geo_comp=geo_comp,
            with_margin=margin,
            with_raw_geoheaders=raw_geoheaders,
            with_population=not no_population,
        )
    except CensusSummaryError as e:
        raise click.ClickException(str(e))

    if output is None:
        _echo_frame(result)
        return

    if output.suffix == ".parquet":
        result.to_parquet(output)
    else:
        result.to_csv(output, index=False)
    click.echo(f"Wrote {len(result)} rows -> {output}")


@cli.command("search-contents")
@click.argument("dataset", type=click.Choice(DATASET_CHOICES))
@click.argument("year", type=int)
@click.argument("keywords", nargs=-1)
@click.pass_context
def search_contents(ctx: click.Context, dataset: str, year: int, keywords: tuple[str, ...]):
    """Search table contents of a dataset year."""
    try:
        found = search_tablecontents(dataset, year, _keyword(keywords), data_root=_census(ctx).data_root)
    except CensusSummaryError as e:
        raise click.ClickException(str(e))
    _echo_frame(found)


@cli.command("search-fips")
@click.argument("keywords", nargs=-1)
@click.option("--state", "-s", help="Restrict to one state")
@click.pass_context
def search_fips_command(ctx: click.Context, keywords: tuple[str, ...], state: Optional[str]):
    """Search FIPS codes of states, counties, county subdivisions and places."""
    try:
        found = search_fips(_keyword(keywords), state, data_root=_census(ctx).data_root)
    except (CensusSummaryError, ValueError) as e:
        raise click.ClickException(str(e))
    _echo_frame(found)


@cli.command("search-cbsa")
@click.argument("keywords", nargs=-1)
@click.pass_context
def search_cbsa_command(ctx: click.Context, keywords: tuple[str, ...]):
    """Search CBSA codes and titles."""
    try:
        found = search_cbsa(_keyword(keywords), data_root=_census(ctx).data_root)
    except CensusSummaryError as e:
        raise click.ClickException(str(e))
    _echo_frame(found)


@cli.command("summary-levels")
@click.argument("keywords", nargs=-1)
@click.option("--components", is_flag=True, help="List geographic components instead")
def summary_levels(keywords: tuple[str, ...], components: bool):
    """List summary levels (or geographic components) and their aliases."""
    if components:
        _echo_frame(search_geocomponents(_keyword(keywords)))
    else:
        _echo_frame(search_summarylevels(_keyword(keywords)))


@cli.command()
@click.pass_context
def info(ctx: click.Context):
    """Show the summary files present under the data root."""
    try:
        census = _census(ctx)
        manager = census.data_manager
    except CensusSummaryError as e:
        raise click.ClickException(str(e))

    click.echo(f"\nData root: {manager.data_root}")

    years = manager.list_years()
    if not years:
        click.echo("\nNo summary files found.")
        click.echo("Extract the Census Bureau summary files under acs1year/, acs5year/ or decennial/.")
        return

    for dataset, dataset_years in years.items():
        kind = DatasetKind.parse(dataset)
        click.echo(f"\n{kind.label}:")
        for year in dataset_years:
            states = manager.list_states(kind, year)
            names = [
                get_state_name(normalize_state(s)) if s != "US" else "United States" for s in states
            ]
            click.echo(f"  {year}: {', '.join(names) if names else 'no states'}")

    reference = sorted(p.stem.split("_")[-1] for p in (manager.generated_dir / "geoid_coord").glob("*.csv"))
    if reference:
        click.echo(f"\nGeo reference datasets ({len(reference)}): {', '.join(reference)}")
    else:
        click.echo("\nNo geo reference datasets; coordinates will be empty.")


if __name__ == "__main__":
    cli()
