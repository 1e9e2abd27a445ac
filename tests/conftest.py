from datetime import datetime, timedelta

import pytest

from inventory_analytics import parsers

NOW = datetime(2026, 10, 18, 12, 0)
TODAY = NOW.date()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def make_item():
    """Raw item record, shaped like the item store's documents."""

    def _make_item(item_id="i1", **overrides):
        record = {
            "id": item_id,
            "name": f"Item {item_id}",
            "category": "Produce",
            "unit": "kg",
            "currentStock": 10,
            "minStock": 5,
            "costPerUnit": 2,
            "status": "good",
            "createdAt": NOW - timedelta(days=90),
        }
        record.update(overrides)
        return record

    return _make_item


@pytest.fixture
def make_movement():
    """Raw movement record `days_ago` days before NOW."""

    def _make_movement(item_id="i1", quantity=1, kind="usage", days_ago=0, hours=0):
        return {
            "itemId": item_id,
            "quantity": quantity,
            "movementType": kind,
            "timestamp": NOW - timedelta(days=days_ago, hours=hours),
        }

    return _make_movement


@pytest.fixture
def items_df():
    def _items_df(raw_items):
        return parsers.items_frame(parsers.normalize_items(raw_items))

    return _items_df


@pytest.fixture
def movements_df():
    def _movements_df(raw_movements):
        return parsers.movements_frame(parsers.normalize_movements(raw_movements))

    return _movements_df
