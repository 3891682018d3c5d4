"""Unit tests for /src/core/shared_types.py"""

import pytest

from src.core.shared_types import EMPTY_CELL, DiscColor


def test_cell_encoding() -> None:
    assert DiscColor.BLACK.cell_value == -1
    assert DiscColor.WHITE.cell_value == 1
    assert EMPTY_CELL == 0


@pytest.mark.parametrize("color", list(DiscColor))
def test_cell_encoding_roundtrip(color: DiscColor) -> None:
    assert DiscColor.from_cell_value(color.cell_value) == color


def test_empty_cell_has_no_color() -> None:
    assert DiscColor.from_cell_value(EMPTY_CELL) is None


def test_opponent() -> None:
    assert DiscColor.BLACK.opponent == DiscColor.WHITE
    assert DiscColor.WHITE.opponent == DiscColor.BLACK
