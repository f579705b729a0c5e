"""Command line entry point: draw a lollipop chart from a CSV file.

Examples
--------
- lollipop-tlbx                                   (bundled team scores sample)
- lollipop-tlbx scores.csv --category team --top-value q1 --second-value q2
- lollipop-tlbx sales.csv --stems --values north south west --baseline 100
"""

import argparse
import logging
from collections.abc import Iterable
from typing import Any

import matplotlib.pyplot as plt

from lollipop_tlbx.analysis.role_resolver import RoleResolver
from lollipop_tlbx.data.tabular_dataset import TabularDataset
from lollipop_tlbx.errors import LollipopError
from lollipop_tlbx.plotting.lollipop_chart import LollipopChart
from lollipop_tlbx.plotting.lollipop_plots import plot_classic_lollipop, plot_lollipop


logger = logging.getLogger(__name__)

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="lollipop-tlbx", description="Draw an interactive lollipop chart from a CSV file.")
    p.add_argument(
        "csv_path",
        nargs="?",
        default=None,
        help="CSV file to plot. If omitted, the bundled team scores sample is used.",
    )
    p.add_argument("--category", help="Category column (x axis)")
    p.add_argument("--top-value", help="Value column of the top series")
    p.add_argument("--second-value", help="Value column of the second series")
    p.add_argument("--top-name", help="Column annotating the top markers")
    p.add_argument("--second-name", help="Column annotating the second markers")
    p.add_argument("--values", nargs="+", help="Explicit value columns (classic chart)")
    p.add_argument(
        "--stems",
        action="store_true",
        help="Classic chart; without --values every numeric column becomes a stem series",
    )
    p.add_argument("--baseline", type=float, default=None, help="Baseline of the stems")
    p.add_argument("--marker-size", type=float, default=None, help="Marker area in points^2")
    p.add_argument("--offset-fraction", type=float, default=None, help="Marker offset as a fraction of the x range")
    p.add_argument("--no-delta", action="store_true", help="Hide the delta labels")
    p.add_argument("--title", default=None, help="Chart title")
    p.add_argument("--index-col", default=None, help="CSV column to use as row labels")
    p.add_argument("--parse-dates", nargs="+", default=None, help="CSV columns to parse as dates")
    p.add_argument("--log-level", choices=_LOG_LEVELS, default="WARNING", help="Logging verbosity")
    p.add_argument("--no-show", action="store_true", help="Build the chart without opening a window")
    return p


def _config_options(args: argparse.Namespace) -> dict[str, Any]:
    options: dict[str, Any] = {
        "baseline": args.baseline,
        "marker_size": args.marker_size,
        "offset_fraction": args.offset_fraction,
        "title": args.title,
    }
    if args.no_delta:
        options["show_delta"] = False
    return {k: v for k, v in options.items() if v is not None}


def build_chart(args: argparse.Namespace) -> LollipopChart:
    """Load the CSV named by ``args`` and build the requested chart."""
    dataset = TabularDataset.from_csv(args.csv_path, index_col=args.index_col, parse_dates=args.parse_dates)
    options = _config_options(args)

    if args.stems or args.values:
        view = dataset.view()
        category = args.category or RoleResolver(view).default_category()
        values = args.values or [col for col in view.numeric_like_cols if col != category]
        logger.info("Classic chart: category=%s values=%s", category, values)
        return plot_classic_lollipop(dataset, category=category, values=values, **options)

    hints = {
        "category": args.category,
        "top_value": args.top_value,
        "second_value": args.second_value,
        "top_name": args.top_name,
        "second_name": args.second_name,
    }
    return plot_lollipop(dataset, **{k: v for k, v in hints.items() if v is not None}, **options)


def main(argv: Iterable[str] | None = None) -> int:
    args = build_arg_parser().parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(level=args.log_level, format="%(levelname)s: %(message)s")

    try:
        chart = build_chart(args)
    except (LollipopError, FileNotFoundError) as exc:
        logger.error("Cannot build chart: %s", exc)
        return 2

    logger.info("Chart ready: %d rows, series %s", chart.geometry.n_rows, ", ".join(chart.geometry.series_names))
    if not args.no_show:
        plt.show()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
