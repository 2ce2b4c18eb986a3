import logging

from fastapi import FastAPI
from mcp.server.fastmcp import FastMCP

from app.config import BASE_URL, LOG_LEVEL
from app.routes import register_api_routes
from app.mcp_handlers import register_mcp

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

# =====================================================
# 1) FastAPI app
# =====================================================
app = FastAPI()

# =====================================================
# 2) MCP Server (SSE transport mounted under /mcp)
# =====================================================
mcp = FastMCP(
    name="storefront-mcp",
    sse_path="/sse",
    message_path="/messages/"
)

register_mcp(mcp)


@app.get("/mcp")
async def mcp_info_handler():
    """MCP server info"""
    return {
        "name": "storefront-mcp",
        "version": "1.0.0",
        "protocols": ["sse"],
        "endpoints": {
            "sse": f"{BASE_URL}/mcp/sse",
            "messages": f"{BASE_URL}/mcp/messages/"
        }
    }

# =====================================================
# 3) Normal API routes
# =====================================================
register_api_routes(app)

# =====================================================
# 4) Debug route
# =====================================================
@app.get("/__routes__")
async def debug_routes():
    return [{"path": route.path, "methods": list(route.methods) if hasattr(route, 'methods') else None} for route in app.router.routes]


app.mount("/mcp", mcp.sse_app("/mcp"))


if __name__ == "__main__":
    import uvicorn, os
    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
