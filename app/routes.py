import logging
from dataclasses import asdict

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from app.catalog import CatalogFetchError, find_entry, get_catalog, search_catalog
from app.cart import add_to_cart, build_cart_summary, remove_from_cart, total_item_count
from app.sessions import DEFAULT_SESSION, get_cart, save_cart

logger = logging.getLogger(__name__)


def _catalog_unavailable(e: CatalogFetchError) -> JSONResponse:
    logger.error("Catalog unavailable: %s", e)
    return JSONResponse(
        {"success": False, "message": "Something went wrong loading the catalog"},
        status_code=502,
    )


def register_api_routes(app):

    # ---------------------------------------------------
    # STOREFRONT API ROUTES
    # ---------------------------------------------------
    router = APIRouter(prefix="/api", tags=["storefront"])

    # 1) Product search
    @router.get("/products")
    async def search_products_endpoint(query: str = Query("", description="Search term")):
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

    # 2) Add one unit
    @router.post("/cart/add")
    async def add_to_cart_endpoint(productId: int, sessionId: str = DEFAULT_SESSION):
        try:
            entries = await get_catalog()
        except CatalogFetchError as e:
            return _catalog_unavailable(e)

        entry = find_entry(entries, productId)
        if not entry:
            return JSONResponse(
                {"success": False, "message": "Product not found"},
                status_code=404,
            )

        state = add_to_cart(get_cart(sessionId), entry)
        save_cart(sessionId, state)
        logger.info("Session %s: added product %d (items=%d)", sessionId, productId, total_item_count(state))

        return {
            "success": True,
            "message": f"{entry.title} added to cart",
            "cart": build_cart_summary(state)
        }

    # 3) Remove one unit; an id that isn't in the cart is a no-op
    @router.post("/cart/remove")
    async def remove_from_cart_endpoint(productId: int, sessionId: str = DEFAULT_SESSION):
        before = get_cart(sessionId)
        state = remove_from_cart(before, productId)
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

    # 4) View cart
    @router.get("/cart")
    async def get_cart_endpoint(sessionId: str = DEFAULT_SESSION):
        state = get_cart(sessionId)
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

    # 5) Badge counter
    @router.get("/cart/count")
    async def cart_count_endpoint(sessionId: str = DEFAULT_SESSION):
        return {"totalItems": total_item_count(get_cart(sessionId))}

    app.include_router(router)
