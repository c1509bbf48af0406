"""
Main CLI entry point for the conic package.
"""

import logging
import sys
from pathlib import Path

import click

from .. import __version__
from ..core.batch_workflow import DEFAULT_WORKFLOW_CONFIG, build_config, run_complete_workflow
from ..core.cptu_io import read_cptu_csv, write_cptu_csv
from ..core.row_filter import remove_rows, replace_rows
from ..core.columns import resolve_columns
from ..exceptions import ConicError
from ..logging_config import setup_logging
from ..utils.config import load_config, merge_configs


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.option('--log-file', type=click.Path(path_type=Path), help='Also write logs to this file')
def cli(verbose, log_file):
    """CPTu sounding processing toolkit.

    Cleans sentinel-flagged rows from CPTu soundings and derives stress,
    normalisation and soil behaviour type parameters.
    """
    setup_logging(logging.DEBUG if verbose else logging.INFO,
                  str(log_file) if log_file else None)


@cli.command()
@click.argument('input_csv', type=click.Path(exists=True, path_type=Path))
@click.argument('output_csv', type=click.Path(path_type=Path))
@click.option('--config', 'config_file', type=click.Path(exists=True, path_type=Path),
              help='YAML or JSON workflow configuration')
@click.option('--area-ratio', type=float, help='Cone net area ratio (0-1]')
@click.option('--gamma-soil', type=float, help='Soil unit weight (kN/m³)')
@click.option('--tolerance', type=float, help='Convergence tolerance on n')
@click.option('--max-iter', type=int, help='Maximum solver iterations per row')
@click.option('--mode', type=click.Choice(['remove', 'replace']), help='How to treat flagged rows')
@click.option('--water-level', type=float, help='Water table depth (m), used when u0 is absent')
@click.option('--workers', type=int, help='Threads for the per-row solver')
def process(input_csv, output_csv, config_file, area_ratio, gamma_soil, tolerance,
            max_iter, mode, water_level, workers):
    """Run the complete processing workflow.

    1. Read and validate the sounding
    2. Remove (or mask) rows holding error indicators
    3. Compute basic parameters (σv, qt, Fr, Bq)
    4. Solve n, Qtn and Ic per row
    5. Classify soil behaviour type

    INPUT_CSV: Raw CPTu sounding
    OUTPUT_CSV: Annotated output table
    """
    try:
        config = {}
        if config_file:
            config = load_config(config_file)

        overrides = {
            "basic": {"area_ratio": area_ratio, "gamma_soil": gamma_soil},
            "derived": {"tolerance": tolerance, "max_iter": max_iter, "workers": workers},
            "filter": {"mode": mode},
            "input": {"water_level": water_level},
        }
        overrides = {
            section: {k: v for k, v in values.items() if v is not None}
            for section, values in overrides.items()
        }
        config = merge_configs(config, overrides)

        click.echo(f"🚀 Processing {input_csv}")
        results = run_complete_workflow(str(input_csv), str(output_csv), config)

        summary = results["convergence"]
        click.echo(f"✅ Wrote {results['rows_out']} rows to {results['output_csv']}")
        click.echo(f"📊 Rows read: {results['rows_in']}")
        click.echo(f"📈 Converged: {summary['converged']}, "
                   f"exhausted: {summary['exhausted']}, skipped: {summary['skipped']}")

    except (ConicError, FileNotFoundError, OSError) as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('input_csv', type=click.Path(exists=True, path_type=Path))
@click.argument('output_csv', type=click.Path(path_type=Path))
@click.option('--indicator', '-i', 'indicators', type=float, multiple=True,
              help='Indicator value (repeatable); defaults to -9999, -8888, -7777')
@click.option('--mode', default='remove', type=click.Choice(['remove', 'replace']),
              help='Delete flagged rows or overwrite them')
@click.option('--water-level', type=float, help='Water table depth (m), used when u0 is absent')
def clean(input_csv, output_csv, indicators, mode, water_level):
    """Remove or mask rows holding error indicator values.

    INPUT_CSV: Raw CPTu sounding
    OUTPUT_CSV: Cleaned table
    """
    try:
        config = build_config({"filter": {"mode": mode}})
        if not indicators:
            indicators = DEFAULT_WORKFLOW_CONFIG["filter"]["indicators"]

        table = read_cptu_csv(input_csv, water_level=water_level)
        if mode == 'replace':
            depth_col = resolve_columns(config["columns"])["depth"]
            cleaned = replace_rows(table, indicators, excluded_columns=[depth_col])
        else:
            cleaned = remove_rows(table, indicators)

        write_cptu_csv(cleaned, output_csv)
        click.echo(f"✅ {mode.capitalize()}d flagged rows: {len(table)} rows in, {len(cleaned)} rows out")
        click.echo(f"💾 Saved: {output_csv}")

    except (ConicError, FileNotFoundError, OSError) as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)


@cli.command()
def examples():
    """Show example usage and commands."""
    click.echo("🎯 CONIC - Example Usage")
    click.echo("=" * 60)
    click.echo()

    click.echo("📋 Complete Workflow (Recommended):")
    click.echo("   conic process sounding.csv results.csv")
    click.echo("   conic process sounding.csv results.csv --area-ratio 0.75 --gamma-soil 18")
    click.echo()

    click.echo("🔧 Individual Components:")
    click.echo("   # Remove rows holding error codes")
    click.echo("   conic clean sounding.csv cleaned.csv")
    click.echo("   # Mask flagged rows with NaN, keeping depth")
    click.echo("   conic clean sounding.csv masked.csv --mode replace -i -9999 -i -8888")
    click.echo()

    click.echo("📊 Advanced Options:")
    click.echo("   # Custom configuration file")
    click.echo("   conic process sounding.csv results.csv --config my_config.yaml")
    click.echo("   # No u0 column: derive it from the water table")
    click.echo("   conic process sounding.csv results.csv --water-level 1.5")
    click.echo()

    click.echo("🔍 Getting Help:")
    click.echo("   conic --help")
    click.echo("   conic process --help")


if __name__ == '__main__':
    cli()
