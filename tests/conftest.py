"""Pytest configuration and fixtures"""
import pytest
from fastapi.testclient import TestClient

from app import catalog
from app.catalog import CatalogEntry
from app.sessions import clear_sessions


@pytest.fixture
def backpack():
    """Sample catalog entry"""
    return CatalogEntry(
        id=1,
        category="men's clothing",
        description="Your perfect pack for everyday use",
        image="https://fakestoreapi.com/img/81fPKd-2AYL._AC_SL1500_.jpg",
        price=9.99,
        title="Fjallraven Backpack",
    )


@pytest.fixture
def tshirt():
    """Second sample catalog entry"""
    return CatalogEntry(
        id=2,
        category="men's clothing",
        description="Slim-fitting style, contrast raglan long sleeve",
        image="https://fakestoreapi.com/img/71-3HjGNDUL._AC_SY879._SX._UX._SY._UY_.jpg",
        price=22.3,
        title="Mens Casual Premium Slim Fit T-Shirts",
    )


@pytest.fixture
def ring():
    return CatalogEntry(
        id=5,
        category="jewelery",
        description="Silver dragon station chain bracelet",
        image="https://fakestoreapi.com/img/71pWzhdJNwL._AC_UL640_QL65_ML3_.jpg",
        price=695,
        title="John Hardy Women's Legends Naga Bracelet",
    )


@pytest.fixture
def feed_records():
    """Raw records as the product feed returns them"""
    return [
        {
            "id": 1,
            "title": "Fjallraven Backpack",
            "price": 109.95,
            "description": "Your perfect pack for everyday use",
            "category": "men's clothing",
            "image": "https://fakestoreapi.com/img/81fPKd-2AYL._AC_SL1500_.jpg",
            "rating": {"rate": 3.9, "count": 120},
        },
        {
            "id": 5,
            "title": "John Hardy Women's Legends Naga Bracelet",
            "price": 695,
            "description": "Silver dragon station chain bracelet",
            "category": "jewelery",
            "image": "https://fakestoreapi.com/img/71pWzhdJNwL._AC_UL640_QL65_ML3_.jpg",
            "rating": {"rate": 4.6, "count": 400},
        },
    ]


@pytest.fixture(autouse=True)
def clean_state():
    """Start every test with no loaded catalog and no carts"""
    catalog.reset_catalog()
    clear_sessions()
    yield
    catalog.reset_catalog()
    clear_sessions()


@pytest.fixture
def loaded_catalog(backpack, tshirt, ring):
    """Catalog already loaded in process, so no feed request is made"""
    catalog.set_catalog([backpack, tshirt, ring])
    return catalog.CATALOG


@pytest.fixture
def client():
    """Test client"""
    from main import app
    return TestClient(app)


@pytest.fixture
def mcp_server():
    """Fresh MCP server with the storefront tools registered"""
    from mcp.server.fastmcp import FastMCP
    from app.mcp_handlers import register_mcp

    server = FastMCP(name="storefront-test")
    register_mcp(server)
    return server
