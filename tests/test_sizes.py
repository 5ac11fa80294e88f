"""Tests for human-readable byte sizes."""

from __future__ import annotations

import pytest

from cargo_cache.sizes import format_size


@pytest.mark.parametrize(
    ('size', 'expected'),
    [
        (0, '0 B'),
        (999, '999 B'),
        (1000, '1.00 KB'),
        (1_500_000, '1.50 MB'),
        (2_340_000_000, '2.34 GB'),
    ],
)
def test_format_size(size: int, expected: str) -> None:
    assert format_size(size) == expected
