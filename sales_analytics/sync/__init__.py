"""
Sync of campaigns and orders from external platforms.
"""
