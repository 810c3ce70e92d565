"""
Notes App Backend - personal notes manager

REST API for user accounts and note management with owner-only writes,
public sharing, search, tag filtering and pagination.
"""

__version__ = "1.0.0"
