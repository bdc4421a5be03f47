"""
Command-line interface for sales reports and platform sync.
"""
import argparse
import logging
import sys
from typing import List, Optional
from sales_analytics.main import run_report, run_sync
from sales_analytics.utils.validation import validate_date_format
from sales_analytics.config.app_config import (
    DEFAULT_LOCALE,
    DEFAULT_METRIC,
    DEFAULT_TIME_RANGE,
    DISPLAY_DATE_FORMATS,
    METRICS,
    REPORT_TYPES,
    TIME_RANGES
)


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.
    
    Args:
        args (Optional[List[str]]): Command-line arguments (uses sys.argv if None)
    
    Returns:
        argparse.Namespace: Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Sales Analytics - Daily sales charts by campaign and product"
    )
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True
    
    report_parser = subparsers.add_parser("report", help="Build daily sales reports")
    report_parser.add_argument(
        "--report",
        action="append",
        choices=REPORT_TYPES,
        help="Report to build, may be repeated (default: all reports)"
    )
    report_parser.add_argument(
        "--time-range",
        type=str,
        choices=TIME_RANGES,
        default=DEFAULT_TIME_RANGE,
        help=f"Time range (default: {DEFAULT_TIME_RANGE})"
    )
    report_parser.add_argument(
        "--start-date",
        type=str,
        help="Custom range start (YYYY-MM-DD), used with --time-range custom"
    )
    report_parser.add_argument(
        "--end-date",
        type=str,
        help="Custom range end (YYYY-MM-DD), used with --time-range custom"
    )
    report_parser.add_argument(
        "--metric",
        type=str,
        choices=METRICS,
        default=DEFAULT_METRIC,
        help=f"Plotted metric (default: {DEFAULT_METRIC})"
    )
    report_parser.add_argument(
        "--locale",
        type=str,
        choices=sorted(DISPLAY_DATE_FORMATS),
        default=DEFAULT_LOCALE,
        help=f"Locale for date labels (default: {DEFAULT_LOCALE})"
    )
    report_parser.add_argument(
        "--output-dir",
        type=str,
        help="Output directory for results (default: auto-generated based on timestamp)"
    )
    report_parser.add_argument(
        "--html",
        action="store_true",
        help="Also write interactive HTML charts"
    )
    
    sync_parser = subparsers.add_parser("sync", help="Sync data from an external platform")
    sync_parser.add_argument("platform", choices=["meta", "woocommerce"])
    sync_parser.add_argument("--start-date", type=str, help="First order day (YYYY-MM-DD)")
    sync_parser.add_argument("--end-date", type=str, help="Last order day (YYYY-MM-DD)")
    
    for sub in (report_parser, sync_parser):
        sub.add_argument(
            "--verbose",
            action="store_true",
            help="Enable verbose logging"
        )
    
    # Parse arguments
    return parser.parse_args(args)


def _invalid_dates(parsed_args: argparse.Namespace) -> List[str]:
    return [
        value for value in (parsed_args.start_date, parsed_args.end_date)
        if value is not None and not validate_date_format(value)
    ]


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.
    
    Args:
        args (Optional[List[str]]): Command-line arguments (uses sys.argv if None)
    
    Returns:
        int: Exit code (0 for success, non-zero for errors)
    """
    # Parse arguments
    parsed_args = parse_args(args)
    
    # Set log level based on verbosity
    log_level = logging.DEBUG if parsed_args.verbose else logging.INFO
    
    for value in _invalid_dates(parsed_args):
        print(f"Error: Invalid date format: {value}. Use YYYY-MM-DD format.")
        return 1
    
    if parsed_args.command == "sync" and bool(parsed_args.start_date) != bool(parsed_args.end_date):
        print("Error: --start-date and --end-date must be given together.")
        return 1
    
    try:
        if parsed_args.command == "report":
            output_dir = run_report(
                reports=parsed_args.report,
                time_range=parsed_args.time_range,
                start_date=parsed_args.start_date,
                end_date=parsed_args.end_date,
                metric=parsed_args.metric,
                locale=parsed_args.locale,
                output_dir=parsed_args.output_dir,
                html=parsed_args.html,
                log_level=log_level
            )
            print(f"\nSales report complete. Results saved in {output_dir}")
        else:
            result = run_sync(
                parsed_args.platform,
                start_date=parsed_args.start_date,
                end_date=parsed_args.end_date,
                log_level=log_level
            )
            print(f"\nSync complete. {result.synced} records written.")
        return 0
    
    except Exception as e:
        print(f"\nError: {str(e)}")
        if parsed_args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
