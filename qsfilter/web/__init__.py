"""
Web integration for qsfilter.

This module provides the FastAPI request extractor and a small query service.
"""

from .extract import decode_query, parse_request_query, query_filter_dependency
from .app import create_app

__all__ = [
    "decode_query",
    "parse_request_query",
    "query_filter_dependency",
    "create_app",
]
