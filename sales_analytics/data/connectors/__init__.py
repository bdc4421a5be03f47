"""
Database connectors.
"""
