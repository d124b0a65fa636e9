"""Pure analysis package for lendingStats.

This package contains deterministic, testable computations that operate on
in-memory inputs and return display strings or DTOs. It must not import
Django or perform any I/O.
"""

from .interpolation import interpolate_series
from .pie_chart import pie_slice_paths
from .token_format import format_token_amount

__all__ = ["format_token_amount", "interpolate_series", "pie_slice_paths"]
