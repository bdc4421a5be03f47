#!/usr/bin/env python3
"""
Setup script for Sales Analytics.
"""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="sales-analytics",
    version="0.1.0",
    author="Sales Analytics Team",
    description="Daily sales charts by campaign and product with Meta Ads and WooCommerce sync",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=[
        "pandas",
        "snowflake-snowpark-python",
        "streamlit",
        "plotly",
        "requests",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "sales-analytics=sales_analytics.cli.report_cli:main",
        ],
    },
)
