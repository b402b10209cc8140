#!/usr/bin/env python3
"""
Settlement Catalog CLI

Builds the merged catalog of Hungarian settlements and their postal codes
from the KSH settlement registry and the Magyar Posta postal directory.

Usage:
    # Download both sources and print a summary
    python -m scripts.settlement_catalog_cli build

    # Use local copies and write the catalog as JSON
    python -m scripts.settlement_catalog_cli build \\
        --registry-file hnt_letoltes_2022.xlsx \\
        --postal-file Iranyitoszam-Internet_uj.xlsx \\
        --output settlements.json
"""

import sys
import logging
from contextlib import ExitStack
from pathlib import Path
from typing import Optional

import click
import requests
from dotenv import load_dotenv

from backend.config import Settings, get_settings
from backend.models.exceptions import SettlementDataError
from schemas.settlement_schema import SettlementCatalogSchema
from services.catalog_service import SettlementCatalogService
from services.download_service import DownloadService
from services.workbook_service import ExcelWorkbookSource

logger = logging.getLogger('settlement_catalog_cli')


def configure_logging(settings: Settings):
    """Log to the configured file and to stdout."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.FileHandler(settings.LOG_FILE),
            logging.StreamHandler(sys.stdout)
        ]
    )


@click.group()
@click.pass_context
def cli(ctx):
    """Hungarian settlement and postal code catalog"""
    load_dotenv()
    settings = get_settings()
    configure_logging(settings)

    ctx.ensure_object(dict)
    ctx.obj['settings'] = settings


@cli.command('build')
@click.option('--registry-file', type=click.Path(exists=True, dir_okay=False),
              help='Local copy of the KSH registry workbook (skips download)')
@click.option('--postal-file', type=click.Path(exists=True, dir_okay=False),
              help='Local copy of the Magyar Posta workbook (skips download)')
@click.option('--output', '-o', type=click.Path(dir_okay=False),
              help='Write the catalog as JSON to this file')
@click.pass_context
def build_cmd(ctx, registry_file: Optional[str], postal_file: Optional[str], output: Optional[str]):
    """Build the settlement catalog."""
    settings: Settings = ctx.obj['settings']
    downloader = DownloadService(timeout=settings.DOWNLOAD_TIMEOUT, download_dir=settings.DOWNLOAD_DIR)

    def on_progress(stage: str, percent: float, message: str):
        click.echo(f"[{percent:5.1f}%] {stage}: {message}")

    service = SettlementCatalogService(
        progress_callback=on_progress,
        registry_sheet_name=settings.REGISTRY_SHEET_NAME
    )

    try:
        with ExitStack() as stack:
            if not registry_file:
                click.echo(f"Downloading registry: {settings.REGISTRY_URL}")
                registry_file = stack.enter_context(downloader.fetch(settings.REGISTRY_URL))
            if not postal_file:
                click.echo(f"Downloading postal codes: {settings.POSTAL_CODES_URL}")
                postal_file = stack.enter_context(downloader.fetch(settings.POSTAL_CODES_URL))

            catalog = service.build(ExcelWorkbookSource(registry_file), ExcelWorkbookSource(postal_file))

    except SettlementDataError as e:
        logger.error(f"Catalog build failed: {e}")
        click.echo(f"Data error: {e}", err=True)
        sys.exit(1)
    except requests.exceptions.RequestException as e:
        logger.error(f"Download failed: {e}")
        click.echo(f"Network error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Catalog build failed: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    stats = service.stats
    click.echo("\nSettlement Catalog")
    click.echo("=" * 50)
    click.echo(f"Settlements: {stats['settlements']}")
    click.echo(f"Postal codes: {stats['postal_codes']}")
    click.echo(f"Settlements without postal code: {stats['settlements_without_postal_code']}")
    click.echo(f"Postal sheets processed: {stats['sheets_processed']} (ignored: {stats['sheets_skipped']})")

    if output:
        payload = SettlementCatalogSchema.from_catalog(catalog)
        Path(output).write_text(payload.model_dump_json(indent=2), encoding='utf-8')
        click.echo(f"\nWrote {payload.total} settlements to {output}")


if __name__ == '__main__':
    cli()
