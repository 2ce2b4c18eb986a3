import logging
from dataclasses import asdict

from mcp.server.fastmcp import FastMCP

from .catalog import CatalogFetchError, find_entry, get_catalog, search_catalog
from .cart import add_to_cart as add_line, build_cart_summary, remove_from_cart as remove_line, total_item_count
from .sessions import DEFAULT_SESSION, get_cart as load_cart, save_cart

logger = logging.getLogger(__name__)


def _catalog_unavailable(e: CatalogFetchError) -> dict:
    logger.error("Catalog unavailable: %s", e)
    return {"success": False, "message": "Something went wrong loading the catalog"}


def register_mcp(mcp: FastMCP):
    """MCP tool registration"""

    @mcp.tool()
    async def search_products(query: str = "") -> dict:
        """Search the catalog"""
        try:
            entries = await get_catalog()
        except CatalogFetchError as e:
            return _catalog_unavailable(e)

        results = search_catalog(entries, query)
        return {
            "products": [asdict(e) for e in results],
            "count": len(results),
            "message": f"{len(results)} products found"
        }

    @mcp.tool()
    async def add_to_cart(productId: int, sessionId: str = DEFAULT_SESSION) -> dict:
        """Add one unit of a product to the cart"""
        try:
            entries = await get_catalog()
        except CatalogFetchError as e:
            return _catalog_unavailable(e)

        entry = find_entry(entries, productId)
        if not entry:
            return {"success": False, "message": "Product not found"}

        state = add_line(load_cart(sessionId), entry)
        save_cart(sessionId, state)
        logger.info("Session %s: added product %d (items=%d)", sessionId, productId, total_item_count(state))

        return {
            "success": True,
            "message": f"{entry.title} added to cart",
            "cart": build_cart_summary(state)
        }

    @mcp.tool()
    async def remove_from_cart(productId: int, sessionId: str = DEFAULT_SESSION) -> dict:
        """Remove one unit of a product from the cart"""
        before = load_cart(sessionId)
        state = remove_line(before, productId)
        changed = state is not before
        if changed:
            save_cart(sessionId, state)
            logger.info("Session %s: removed product %d (items=%d)", sessionId, productId, total_item_count(state))

        return {
            "success": True,
            "changed": changed,
            "message": "Product removed from cart" if changed else "Product is not in the cart",
            "cart": build_cart_summary(state)
        }

    @mcp.tool()
    async def get_cart(sessionId: str = DEFAULT_SESSION) -> dict:
        """Show the cart"""
        state = load_cart(sessionId)
        summary = build_cart_summary(state)

        if not state:
            return {
                "isEmpty": True,
                "message": "Your cart is empty",
                "cart": summary
            }

        return {
            "isEmpty": False,
            "message": f"{summary['totalQuantity']} items in your cart",
            "cart": summary
        }
