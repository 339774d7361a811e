from __future__ import annotations

import pytest

from pdfmerger.typing.enums import MoveDirection


def test_move_direction_from_str() -> None:
    assert MoveDirection.from_str("up") == MoveDirection.UP
    assert MoveDirection.DOWN.to_str() == "down"


def test_move_direction_from_str_raises_on_invalid_value() -> None:
    with pytest.raises(ValueError, match="Unsupported MoveDirection value"):
        MoveDirection.from_str("left")


def test_move_direction_offset() -> None:
    assert MoveDirection.UP.offset == -1
    assert MoveDirection.DOWN.offset == 1
