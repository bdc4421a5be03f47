#!/usr/bin/env python3
"""
CLI entry point for Sales Analytics.
"""
import sys
from sales_analytics.cli.report_cli import main

if __name__ == "__main__":
    sys.exit(main())
