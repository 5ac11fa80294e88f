"""Human-readable byte sizes using decimal (SI) units."""

from __future__ import annotations

__all__ = ['format_size']

_UNITS = ('KB', 'MB', 'GB', 'TB', 'PB')


def format_size(size: int) -> str:
    """
    Format a byte count with decimal units.

    Examples:
        >>> format_size(512)
        '512 B'

        >>> format_size(1_500_000)
        '1.50 MB'
    """
    if size < 1000:
        return f'{size} B'
    value = float(size)
    unit = _UNITS[0]
    for unit in _UNITS:
        value /= 1000
        if value < 1000:
            break
    return f'{value:.2f} {unit}'
