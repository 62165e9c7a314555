# Path: provisioner/core/display.py
"""
Terminal Display Helpers

Shared rich console plus human-readable size and speed formatting
used by progress bars, result tables and the install CLI.
"""

import math

from rich.console import Console

console = Console(stderr=True)

SPEED_UNITS = ('B/s', 'KB/s', 'MB/s', 'GB/s')
SIZE_UNITS = ('B', 'KB', 'MB', 'GB')
UNIT_BASE = 1024


def _scale(value: float, units: tuple) -> str:
    if value <= 0:
        return f"0 {units[0]}"
    exponent = min(int(math.floor(math.log(value, UNIT_BASE))), len(units) - 1)
    exponent = max(exponent, 0)
    return f"{value / (UNIT_BASE ** exponent):.2f} {units[exponent]}"


def format_speed(bytes_per_second: float) -> str:
    """
    Format a throughput for display.

    Example:
        format_speed(0)           # '0 B/s'
        format_speed(1536)        # '1.50 KB/s'
        format_speed(5 * 1024**2) # '5.00 MB/s'
    """
    return _scale(bytes_per_second, SPEED_UNITS)


def format_size(num_bytes: float) -> str:
    """Format a byte count for display."""
    return _scale(num_bytes, SIZE_UNITS)


__all__ = ['console', 'format_speed', 'format_size']
