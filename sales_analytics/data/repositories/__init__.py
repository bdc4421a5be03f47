"""
Repositories over the hosted sales database.
"""
