"""
Validation for qsfilter requests.

This module checks parsed queries against their declared schema and caps
pagination.
"""

from .rules import (
    assert_order_allowed,
    cap_limit,
)

__all__ = [
    "assert_order_allowed",
    "cap_limit",
]
