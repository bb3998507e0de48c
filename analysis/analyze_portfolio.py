#!/usr/bin/env python3
"""
CLI tool for analyzing a weighted basket of catalog assets.
Usage: python analysis/analyze_portfolio.py KEY=WEIGHT [KEY=WEIGHT ...] [options]
"""

import os
import sys
import logging
import argparse
from pathlib import Path
from typing import List, Tuple
from dotenv import load_dotenv

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from analysis.guardrails import InputError, find_non_finite_metrics
from analysis.portfolio_calculator import calculate
from ingestion.catalog_loader import load_asset_catalog, CatalogLoadError
from ingestion.transforms.normalizers import normalize_allocation_points
from reports.atomic_writer import write_result_json, write_series_csv, verify_file_integrity
from reports.formatters import format_signed_value
from reports.scorecard import build_scorecard, has_yield_gain

load_dotenv()

logger = logging.getLogger('analysis.analyze_portfolio')


def parse_allocations(pairs: List[str]) -> Tuple[List[str], List[str]]:
    """
    Split KEY=WEIGHT arguments into keys and raw weights.

    Weights stay as strings; the calculator decides whether they are numeric.

    Raises:
        InputError: If an argument has no '=' or an empty key
    """
    keys, weights = [], []
    for pair in pairs:
        key, sep, weight = pair.partition('=')
        if not sep or not key.strip():
            raise InputError(f"Expected KEY=WEIGHT, got {pair!r}")
        keys.append(key.strip())
        weights.append(weight.strip())
    return keys, weights


def resolve_log_level(level_name: str) -> int:
    """Logging level for a LOG_LEVEL name; unknown names fall back to WARNING."""
    level = logging.getLevelName(str(level_name).strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description='Analyze value series and risk metrics for a weighted basket',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python analysis/analyze_portfolio.py BTC=5 ETH=3 GOLD=2
  python analysis/analyze_portfolio.py BTC=5 USDY=5 --with-yield
  python analysis/analyze_portfolio.py BTC=7.6 ETH=2.4 --points
  python analysis/analyze_portfolio.py ETH=1 --catalog ./tests/fixtures/sample_catalog.yml --output ./data/eth.json
        """
    )

    parser.add_argument('allocations', nargs='+', metavar='KEY=WEIGHT',
                        help='Asset key and allocation weight (any positive scale)')
    parser.add_argument('--catalog',
                        help='Asset catalog YAML/JSON (default: $PORTFOLIO_CATALOG_PATH or ./config/asset_catalog.yml)')
    parser.add_argument('--points',
                        action='store_true',
                        help='Treat weights as 0-10 allocation points (rounded, clamped)')
    parser.add_argument('--with-yield',
                        action='store_true',
                        help='Show the yield-adjusted view')
    parser.add_argument('--output',
                        help='Write the full result as JSON to this path')
    parser.add_argument('--csv',
                        help='Write both value series as CSV to this path')
    parser.add_argument('--quiet', '-q',
                        action='store_true',
                        help='Minimal output (just success/failure)')

    args = parser.parse_args()

    logging.basicConfig(
        level=resolve_log_level(os.getenv('LOG_LEVEL', 'WARNING')),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    try:
        catalog = load_asset_catalog(args.catalog)
        keys, weights = parse_allocations(args.allocations)
        if args.points:
            weights = normalize_allocation_points(weights)
        result = calculate(keys, weights, catalog)
    except CatalogLoadError as e:
        print(f"❌ Catalog error: {e}", file=sys.stderr)
        sys.exit(1)
    except InputError as e:
        print(f"❌ Invalid portfolio: {e}", file=sys.stderr)
        sys.exit(1)

    for path in find_non_finite_metrics(result):
        logger.warning(f"Non-finite value in result: {path}")

    if args.output:
        _check_written(write_result_json(result.to_dict(), Path(args.output)), args.output)

    if args.csv:
        _check_written(write_series_csv(result.to_frame(), Path(args.csv)), args.csv)

    if args.quiet:
        print(f"✅ {' '.join(keys)} analysis complete")
        sys.exit(0)

    _show_summary(result, keys, args.with_yield)
    if args.output:
        print(f"💾 Result saved to: {args.output}")
    if args.csv:
        print(f"💾 Series saved to: {args.csv}")

    sys.exit(0)


def _check_written(status, path: str):
    """Exit with 1 unless the export landed on disk intact."""
    if status['status'] != 'completed':
        print(f"❌ Failed to write {path}: {status['error']}", file=sys.stderr)
        sys.exit(1)

    if not verify_file_integrity(Path(path), status['bytes_written']):
        print(f"❌ Written file failed integrity check: {path}", file=sys.stderr)
        sys.exit(1)


def _show_summary(result, keys: List[str], with_yield: bool):
    """Print KPI tiles and gauges for the selected view."""
    card = build_scorecard(result, with_yield=with_yield)
    view = 'with yield' if with_yield else 'price only'

    print(f"📋 Portfolio {' / '.join(keys)} ({view})")
    for key, weight in zip(keys, result.weights):
        print(f"   {key}: {weight * 100:.1f}%")
    print()

    for tile in card['tiles']:
        print(f"   {tile['label']}: {tile['value']}")
    print()

    for gauge in card['gauges']:
        print(f"   {gauge['category']:<11} {gauge['percent']:>3}%  {gauge['hint']}")

    if not with_yield and has_yield_gain(result.metrics_on):
        print()
        print(f"   (Yield would add {format_signed_value(result.metrics_on.gain_on_yield)}; use --with-yield)")


if __name__ == "__main__":
    main()
