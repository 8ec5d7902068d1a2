"""MCP server entry point — thin proxy to the persistent daemon."""
import asyncio
import json
import logging
import httpx
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from . import config

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
log = logging.getLogger(__name__)

DAEMON_URL = f"http://{config.DAEMON_HOST}:{config.DAEMON_PORT}"
RESERVED_HELP = "left-top, top, right-top, center, left-bottom, bottom, right-bottom"

app = Server("detection-point")

# ─── Tool definitions ───────────────────────────────────────────

TOOLS = [
    Tool(
        name="point_set",
        description=f"Set the current screen point from explicit 'x,y' coordinates or a reserved position ({RESERVED_HELP}). The point stays until set again and is the target of element_at_point.",
        inputSchema={
            "type": "object",
            "properties": {
                "coordinates": {"type": "string", "description": f"'x,y' (e.g. '120.5,300') or one of: {RESERVED_HELP}"},
            },
            "required": ["coordinates"],
        },
    ),
    Tool(
        name="point_get",
        description="Return the current screen point as 'x,y'.",
        inputSchema={"type": "object", "properties": {}},
    ),
    Tool(
        name="point_resolve",
        description="Compute where a reserved position falls on the current screen without changing the current point. Unknown keywords return resolved=false.",
        inputSchema={
            "type": "object",
            "properties": {
                "keyword": {"type": "string", "description": RESERVED_HELP},
            },
            "required": ["keyword"],
        },
    ),
    Tool(
        name="element_at_point",
        description="Return the UI element under the current screen point, or null if nothing is there.",
        inputSchema={"type": "object", "properties": {}},
    ),
    Tool(
        name="element_at",
        description="Return the UI element under explicit coordinates without changing the current point.",
        inputSchema={
            "type": "object",
            "properties": {
                "coordinates": {"type": "string", "description": "'x,y'"},
            },
            "required": ["coordinates"],
        },
    ),
    Tool(
        name="ip_address",
        description="Return the host's local IPv4 address.",
        inputSchema={"type": "object", "properties": {}},
    ),
    Tool(
        name="health_check",
        description="Check daemon status, element backend and display.",
        inputSchema={"type": "object", "properties": {}},
    ),
]


# ─── Route map ──────────────────────────────────────────────────

ROUTE_MAP = {
    "point_set": ("POST", "/point"),
    "point_get": ("GET", "/point"),
    "point_resolve": ("POST", "/resolve"),
    "element_at_point": ("GET", "/point/element"),
    "element_at": ("POST", "/element_at"),
    "ip_address": ("GET", "/ip"),
    "health_check": ("GET", "/health"),
}


# ─── Proxy handler ──────────────────────────────────────────────

@app.list_tools()
async def list_tools():
    return TOOLS


@app.call_tool()
async def call_tool(name: str, arguments: dict):
    if name not in ROUTE_MAP:
        return [TextContent(type="text", text=json.dumps({"error": f"Unknown tool: {name}"}))]

    method, path = ROUTE_MAP[name]
    try:
        async with httpx.AsyncClient(timeout=30.0) as client:
            if method == "GET":
                resp = await client.get(f"{DAEMON_URL}{path}")
            else:
                resp = await client.post(f"{DAEMON_URL}{path}", json=arguments or {})

            data = resp.json()
            return [TextContent(type="text", text=json.dumps(data))]
    except httpx.ConnectError:
        return [TextContent(type="text", text=json.dumps({
            "error": "detection-point daemon is not running. Start it with: detection-point-daemon",
            "hint": "Run: detection-point-daemon  (or: python -m detection_point.daemon)"
        }))]
    except Exception as e:
        log.error(f"Tool {name} failed: {e}")
        return [TextContent(type="text", text=json.dumps({"error": str(e)}))]


def main():
    log.info("Starting detection-point MCP server (proxy mode)")
    asyncio.run(_run())


async def _run():
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())


if __name__ == "__main__":
    main()
