"""
Tests for the order history log
"""

import json

from storefront.core.carts.models import CartLine, Money
from storefront.utils.logger import log_order


def _line():
    return CartLine(identity_key="p-", product_id="p", name="P", price=Money(amount="9.99"), quantity=2)


def test_first_record_creates_file(order_log_file):
    log_order("s1", [_line()], status="placed", detail="order-1")
    history = json.loads(order_log_file.read_text(encoding="utf-8"))
    assert history[0]["items"] == [{"identity_key": "p-", "quantity": 2, "unit_price": "9.99"}]
    assert history[0]["detail"] == "order-1"


def test_records_are_appended(order_log_file):
    log_order("s1", [_line()], status="failed", detail="timeout")
    log_order("s1", [_line()], status="placed", detail="order-2")
    history = json.loads(order_log_file.read_text(encoding="utf-8"))
    assert [r["status"] for r in history] == ["failed", "placed"]


def test_corrupt_longer_file_is_replaced_cleanly(order_log_file):
    order_log_file.write_text("{" + "x" * 5000, encoding="utf-8")
    log_order("s1", [_line()], status="placed")
    history = json.loads(order_log_file.read_text(encoding="utf-8"))
    assert len(history) == 1


def test_non_list_history_is_restarted(order_log_file):
    order_log_file.write_text(json.dumps({"not": "a list", "padding": "y" * 5000}), encoding="utf-8")
    log_order("s1", [_line()], status="placed")
    history = json.loads(order_log_file.read_text(encoding="utf-8"))
    assert isinstance(history, list) and len(history) == 1
