"""
Sales aggregation and charting.
"""
