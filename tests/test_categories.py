import pytest

from inventory_analytics import parsers
from inventory_analytics.components.categories import build_category_breakdown


def test_empty():
    assert build_category_breakdown(parsers.items_frame([])) == []


def test_breakdown_sorted_by_value(make_item, items_df):
    df = items_df(
        [
            make_item("a", category="produce", costPerUnit=2, currentStock=10, minStock=5),
            make_item(
                "b", category="produce", costPerUnit=1, currentStock=3, minStock=4, status="low"
            ),
            make_item(
                "c", category="dairy", costPerUnit=10, currentStock=5, minStock=0, status="critical"
            ),
            make_item("d", category="Produce", costPerUnit=0, currentStock=1, minStock=1),
        ]
    )
    breakdown = build_category_breakdown(df)

    assert [c.category for c in breakdown] == ["dairy", "produce", "Produce"]

    dairy, produce, other = breakdown
    assert dairy.item_count == 1
    assert dairy.total_value == 50
    assert dairy.average_stock_level == 5
    assert dairy.low_stock_count == 1

    assert produce.item_count == 2
    assert produce.total_value == 23
    assert produce.average_stock_level == pytest.approx((10 / 5 + 3 / 4) / 2)
    assert produce.low_stock_count == 1

    assert other.total_value == 0
    assert other.low_stock_count == 0


def test_out_of_stock_counts_as_low(make_item, items_df):
    df = items_df(
        [
            make_item("a", status="out", currentStock=0),
            make_item("b", status="critical"),
            make_item("c", status="good"),
        ]
    )
    (produce,) = build_category_breakdown(df)
    assert produce.low_stock_count == 2


def test_equal_values_keep_first_seen_order(make_item, items_df):
    df = items_df(
        [
            make_item("a", category="zeta", costPerUnit=0),
            make_item("b", category="alpha", costPerUnit=0),
        ]
    )
    assert [c.category for c in build_category_breakdown(df)] == ["zeta", "alpha"]
