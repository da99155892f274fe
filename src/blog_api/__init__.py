"""
Blog Posts API - single-table post CRUD service with search and category filters
"""

__version__ = "1.0.0"
