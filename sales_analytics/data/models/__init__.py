"""
Data models for sales analytics.
"""
