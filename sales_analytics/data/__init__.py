"""
Data access package: connectors, models and repositories.
"""
