from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))


def test_menu_item_requires_name_and_category(menu_item_factory) -> None:
    with pytest.raises(ValueError):
        menu_item_factory(name="  ")
    with pytest.raises(ValueError):
        menu_item_factory(category="")


def test_with_availability_returns_copy(menu_item_factory) -> None:
    item = menu_item_factory()

    hidden = item.with_availability(False)

    assert hidden.available is False
    assert item.available is True
    assert hidden.price == item.price
