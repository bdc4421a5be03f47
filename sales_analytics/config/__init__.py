"""
Configuration package for sales analytics.
"""
