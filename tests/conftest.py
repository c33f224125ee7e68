"""
Shared pytest fixtures: sample catalog snapshots and engines over them.
"""
import pytest

from app.domain.models.product import ProductRecord
from app.domain.repositories.memory_catalog_repo import InMemoryCatalogStore
from app.domain.services.search_engine import SearchEngine


def make_product(product_id, title, *, price=1000, rating=0.0, tags=(), description=None, **kw):
    return ProductRecord(
        product_id=product_id,
        title=title,
        description=description,
        price=price,
        rating=rating,
        tags=tuple(tags),
        **kw,
    )


@pytest.fixture
def headphones():
    return make_product("A", "Wireless Bluetooth Headphones", price=8000, rating=4.5, tags=["audio", "wireless"])


@pytest.fixture
def mouse():
    return make_product("B", "Gaming Mouse RGB", price=6000, rating=4.0, tags=["gaming"])


@pytest.fixture
def two_products(headphones, mouse):
    return [headphones, mouse]


@pytest.fixture
def catalog(headphones, mouse):
    """A slightly larger catalog with overlapping vocabulary."""
    return [
        headphones,
        mouse,
        make_product("C", "Bluetooth Speaker", price=4500, rating=4.2, tags=["audio", "wireless"],
                     description="Portable bluetooth speaker with deep bass"),
        make_product("D", "Wired Headphones", price=2500, rating=3.9, tags=["audio"]),
        make_product("E", "Gaming Keyboard RGB", price=12000, rating=4.7, tags=["gaming", "keyboard"]),
        make_product("F", "Coffee Mug", price=1200, rating=4.5, tags=["kitchen"]),
    ]


@pytest.fixture
def store(catalog):
    return InMemoryCatalogStore(catalog)


@pytest.fixture
def engine(store):
    return SearchEngine(store, fetch_timeout=1.0)
