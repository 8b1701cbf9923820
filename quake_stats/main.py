"""quake-stats — USGS earthquake queries, validated records and reports.

This is the application entry point.  It wires the RetrievalClient,
ConverterRegistry, ReportEngine and QuerySession together and hands the
session to the interactive CommandShell.
"""

from __future__ import annotations

import argparse
import logging

from quake_stats.adapters.geojson import GeoJsonV1Adapter
from quake_stats.adapters.registry import ConverterRegistry
from quake_stats.cli.shell import CommandShell
from quake_stats.config import Settings, settings
from quake_stats.core.report_engine import ReportEngine
from quake_stats.services.retrieval import RetrievalClient
from quake_stats.store.session import QuerySession

logger = logging.getLogger(__name__)


def build_session(config: Settings = settings) -> QuerySession:
    """Create the session with exactly one configured client and converter."""

    # ── Retrieval ────────────────────────────────────────────────────────

    client = RetrievalClient(
        base_url=config.api_base_url,
        connect_timeout=config.connect_timeout_seconds,
        read_timeout=config.read_timeout_seconds,
        attempts=config.retry_attempts,
        backoff_seconds=config.retry_backoff_seconds,
    )

    # ── Conversion ───────────────────────────────────────────────────────

    registry = ConverterRegistry()
    registry.register(
        GeoJsonV1Adapter(
            api_prefix=config.supported_api_prefix,
            magnitude_type_prefix=config.magnitude_type_prefix,
        )
    )

    # ── State ────────────────────────────────────────────────────────────

    return QuerySession(client=client, converter=registry, engine=ReportEngine())


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog=settings.app_name,
        description="Query the USGS earthquake catalog and generate statistical reports.",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    # ── Logging ──────────────────────────────────────────────────────────

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    # ── App ──────────────────────────────────────────────────────────────

    shell = CommandShell(build_session(settings), prompt_attempts=settings.prompt_attempts)
    shell.show_manual()
    try:
        shell.run()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
