"""Print a summary of an instrument catalog document."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from app.config import get_app_config
from shared.logging_config import LogVerbosity, ensure_app_logging

from .models import Catalog, ScoreOrderGroup
from .reader import InstrumentsReader
from .translation import gettext_translator, identity_translator


logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="instrument_catalog", description=__doc__)
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="Catalog document to read (defaults to the configured catalog).",
    )
    parser.add_argument(
        "--orders",
        action="store_true",
        help="Also list the score orders and their groups.",
    )
    parser.add_argument(
        "--log-level",
        choices=[verbosity.value for verbosity in LogVerbosity],
        help="Verbosity of the log file (defaults to the configured level).",
    )
    return parser.parse_args(argv)


def _describe_group(group: ScoreOrderGroup) -> str:
    if group.is_soloists:
        label = "soloists"
    elif group.is_unsorted:
        label = f"unsorted ({group.unsorted})" if group.unsorted else "unsorted"
    else:
        label = group.family
    if group.section:
        label = f"{label} [section {group.section}]"
    return f"{group.index:>3}  {label}"


def print_catalog(catalog: Catalog, *, orders: bool = False, stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    for group in catalog.groups_in_order():
        print(f"{group.name or group.id} ({group.id})", file=stream)
        for template in catalog.templates_in_group(group.id):
            instrument = template.instrument
            print(f"  {template.id}: {instrument.name}", file=stream)

    if not orders:
        return
    for order in catalog.score_orders_in_order():
        print(f"Order {order.name or order.id} ({order.id})", file=stream)
        for group in order.groups:
            print(f"  {_describe_group(group)}", file=stream)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    config = get_app_config()
    ensure_app_logging(args.log_level or config.logging.verbosity)

    catalog_config = config.catalog
    translate = identity_translator
    if catalog_config.locale_dir is not None:
        languages = [catalog_config.language] if catalog_config.language else None
        translate = gettext_translator(catalog_config.locale_dir, languages)

    path = args.path or catalog_config.source_path
    result = InstrumentsReader(translate=translate).read_meta(path)
    if result.is_err():
        print(result.error, file=sys.stderr)
        return 1

    print_catalog(result.unwrap(), orders=args.orders)
    return 0


__all__ = ["main", "parse_args", "print_catalog"]
