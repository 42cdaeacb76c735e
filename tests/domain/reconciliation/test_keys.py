from __future__ import annotations

import pytest

from vendorrecon.domain.errors import InvalidUpcError
from vendorrecon.domain.reconciliation import normalize_upc


def test_drops_final_check_digit() -> None:
    assert normalize_upc("012345678905") == "01234567890"


def test_strips_surrounding_whitespace() -> None:
    assert normalize_upc("  0123  ") == "012"


def test_single_digit_is_returned_unchanged() -> None:
    assert normalize_upc("7") == "7"


@pytest.mark.parametrize("upc", ["", "   ", "12A4", "12-34", "１２３"])
def test_rejects_non_digit_or_empty_input(upc: str) -> None:
    with pytest.raises(InvalidUpcError) as exc:
        normalize_upc(upc)

    assert exc.value.upc == upc
