"""CLI command implementations for the brand signal engine."""

from __future__ import annotations

import json
from pathlib import Path

import click

from brandsignal.models.config import Config
from brandsignal.utils.logger import configure_logging


def _get_config() -> Config:
    """Load configuration from environment and .env file."""
    return Config()


@click.command()
@click.argument("url", required=False)
@click.option(
    "--html-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Analyze local markup instead of fetching URL",
)
@click.option("--base-url", help="Base URL for --html-file (final URL of the page)")
@click.option("--no-probe", is_flag=True, help="Skip logo reachability probes")
@click.option("--indent", default=2, type=int, help="JSON indentation")
def analyze(
    url: str | None,
    html_file: Path | None,
    base_url: str | None,
    no_probe: bool,
    indent: int,
) -> None:
    """Extract the brand signal of a site and print it as JSON."""
    config = _get_config()
    configure_logging(config.log_level)

    from brandsignal.services.reachability import OfflineProber
    from brandsignal.services.signal_assembler import analyze_markup, analyze_site
    from brandsignal.services.site_gateway import SiteFetchError

    prober = OfflineProber() if no_probe else None

    try:
        if html_file is not None:
            if not base_url:
                raise click.UsageError("--base-url is required with --html-file")
            markup = html_file.read_text(encoding="utf-8", errors="replace")
            signal = analyze_markup(markup, base_url, prober=prober, config=config)
        elif url:
            signal = analyze_site(url, config=config, prober=prober)
        else:
            raise click.UsageError("Provide a URL or --html-file with --base-url")
    except (SiteFetchError, ValueError) as exc:
        click.echo(f"[ERROR] {exc}", err=True)
        raise SystemExit(1) from exc

    click.echo(json.dumps(signal.to_dict(), indent=indent, ensure_ascii=False))
