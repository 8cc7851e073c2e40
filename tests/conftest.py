"""Pytest configuration and fixtures"""
from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from storefront.core.carts.models import AttributeGroup, AttributeOption, Category, Money, Product
from storefront.core.carts.service import CartService
from storefront.core.carts.store import CartStore
from storefront.core.carts.store_memory import MemoryStorage


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class FakePipeline:
    client: "FakeRedisClient"
    pending: list[tuple[str, str]] = field(default_factory=list)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.pending.clear()

    def set(self, key: str, value: str):
        self.pending.append((key, value))

    def execute(self):
        for key, value in self.pending:
            self.client.set(key, value)
        self.pending.clear()


@dataclass
class FakeRedisClient:
    data: dict[str, str] = field(default_factory=dict)
    reachable: bool = True

    def ping(self) -> bool:
        if not self.reachable:
            raise ConnectionError("Connection refused")
        return True

    def get(self, key: str):
        return self.data.get(key)

    def set(self, key: str, value: str):
        self.data[key] = value
        return True

    def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
        return removed

    def pipeline(self) -> FakePipeline:
        return FakePipeline(self)


class BrokenStorage:
    """Backend que falla en todas las operaciones (cuota llena, disco, red)."""

    namespace = "broken"

    def get(self, key):
        raise OSError("storage unavailable")

    def set_many(self, values):
        raise OSError("quota exceeded")

    def delete(self, *keys):
        raise OSError("storage unavailable")


@pytest.fixture(autouse=True)
def order_log_file(tmp_path, monkeypatch):
    import storefront.utils.logger as logger_module

    path = tmp_path / "order_history.json"
    monkeypatch.setattr(logger_module, "LOG_FILE", str(path))
    return path


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage, clock):
    return CartStore(storage, ttl_seconds=600, clock=clock)


@pytest.fixture
def service(store):
    return CartService(store)


@pytest.fixture
def fake_redis():
    return FakeRedisClient()


@pytest.fixture
def plain_product():
    """Producto sin atributos de variante."""
    return Product(
        id="apple-airtag",
        name="AirTag",
        brand="Apple",
        price=Money(amount="120.57", currency_symbol="$"),
        gallery=["https://img.example/airtag-1.jpg", "https://img.example/airtag-2.jpg"],
        category=Category(name="tech"),
    )


@pytest.fixture
def jacket():
    return Product(
        id="jacket-canada-goosee",
        name="Jacket",
        brand="Canada Goose",
        price=Money(amount="518.47", currency_symbol="$"),
        gallery=["https://img.example/jacket.jpg"],
        category=Category(name="clothes"),
        attributes=[
            AttributeGroup(name="Color", items=[
                AttributeOption(value="Red", display_value="Red"),
                AttributeOption(value="Blue", display_value="Blue"),
            ]),
            AttributeGroup(name="Size", items=[
                AttributeOption(value="S", display_value="Small"),
                AttributeOption(value="M", display_value="Medium"),
            ]),
        ],
    )


@pytest.fixture
def out_of_stock_product():
    return Product(
        id="ps-5",
        name="PlayStation 5",
        brand="Sony",
        in_stock=False,
        price=Money(amount="844.02"),
        gallery=["https://img.example/ps5.jpg"],
        category=Category(name="tech"),
    )
