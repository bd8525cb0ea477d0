"""CLI entry point for SMBIOS table decoding."""

import json
import sys

import click
from rich.console import Console
from rich.table import Table

from smbios_tables import __version__
from smbios_tables.config import ConfigManager
from smbios_tables.discovery import TableSource, load_table
from smbios_tables.logs import LogManager
from smbios_tables.results import TABLE_COLUMNS, ResultSet, SnapshotError, compare_results

console = Console()

OUTPUT_FORMATS = ("table", "json")


def _setup(config_path, debug):
    """Load configuration and configure package logging."""
    config = ConfigManager(config_path)
    config.load()

    level = "DEBUG" if debug else config.get("logging", "log_level", "WARNING")
    LogManager("smbios_tables", config.get("logging", "log_dir"), level)
    return config


def _source(config, input_path):
    """Command line input wins over the configured table path."""
    return TableSource(path=input_path or config.get("source", "table_path"))


def _render_table(result_set: ResultSet) -> None:
    """Print decoded entries as a rich table."""
    table = Table(title=f"SMBIOS structures ({len(result_set)})")
    for name, _ in TABLE_COLUMNS:
        table.add_column(name, justify="left" if name in ("description", "md5") else "right")

    for row in result_set.rows():
        table.add_row(
            str(row["number"]),
            str(row["type"]),
            row.get("description", ""),
            f"0x{row['handle']:04x}",
            str(row["header_size"]),
            str(row["size"]),
            row["md5"],
        )

    console.print(table)


config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="INI configuration file",
)
input_option = click.option(
    "--input",
    "-i",
    "input_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Raw SMBIOS table dump to decode instead of the live platform table",
)
debug_option = click.option(
    "--debug",
    is_flag=True,
    help="Enable debug logging of structure boundaries",
)


@click.group()
@click.version_option(version=__version__)
def cli():
    """SMBIOS Tables - Decode and fingerprint SMBIOS/DMI structures."""
    pass


@cli.command()
@input_option
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default=None,
    help="Output format (default: table, or [output] format from config)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also save a JSON snapshot for later comparison",
)
@config_option
@debug_option
def dump(input_path, output_format, output, config_path, debug):
    """Decode the SMBIOS structure table."""
    config = _setup(config_path, debug)

    output_format = output_format or config.get("output", "format", "table")
    if output_format not in OUTPUT_FORMATS:
        raise click.BadParameter(
            f"unsupported output format {output_format!r}", param_hint="[output] format"
        )

    result_set = ResultSet(load_table(_source(config, input_path)))

    if output_format == "json":
        click.echo(json.dumps(result_set.rows(), indent=2))
    elif result_set.entries:
        _render_table(result_set)
    else:
        console.print("[yellow]⚠️  No SMBIOS structures available[/yellow]")

    if output:
        path = result_set.save(output)
        if output_format != "json":
            console.print(f"📝 Saved to {path}")


@cli.command()
@click.argument("snapshot", type=click.Path(dir_okay=False))
@input_option
@config_option
@debug_option
def compare(snapshot, input_path, config_path, debug):
    """Compare the current SMBIOS table against a saved snapshot."""
    config = _setup(config_path, debug)

    try:
        baseline = ResultSet.load(snapshot)
    except SnapshotError as e:
        raise click.ClickException(str(e))

    current = ResultSet(load_table(_source(config, input_path))).rows()
    diff = compare_results(baseline, current)

    for row in diff["added"]:
        console.print(
            f"[green]+ handle 0x{row['handle']:04x}[/green] type {row.get('type')} "
            f"{row.get('description', '')}"
        )
    for row in diff["removed"]:
        console.print(
            f"[red]- handle 0x{row['handle']:04x}[/red] type {row.get('type')} "
            f"{row.get('description', '')}"
        )
    for change in diff["changed"]:
        old, new = change["baseline"], change["current"]
        console.print(
            f"[yellow]~ handle 0x{change['handle']:04x}[/yellow] "
            f"size {old.get('size')} -> {new.get('size')}, md5 {old.get('md5')} -> {new.get('md5')}"
        )

    total = len(diff["added"]) + len(diff["removed"]) + len(diff["changed"])
    if total:
        console.print(f"\n{total} difference(s) from {snapshot}")
        sys.exit(1)

    console.print(f"✓ No differences from {snapshot} ({len(current)} structure(s))")


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
