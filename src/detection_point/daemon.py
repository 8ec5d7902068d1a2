"""Persistent daemon for detection-point — current point, element lookup, host address.

Runs as a local HTTP server so the MCP server (spawned per call) shares one
current point across automation steps.
"""
import asyncio
import logging
import os
import time
from aiohttp import web

from . import config, debug
from .accessibility import get_backend
from .network import NoInterfaceError, ip_address
from .point import CoordinateParseError, ScreenPoint, finite_point, format_coordinates, get_resolver, parse_coordinates

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
log = logging.getLogger(__name__)


async def _parse_body(request: web.Request) -> dict:
    """Parse JSON body, normalizing keys that have trailing colons (mcporter :=  syntax artifact)."""
    if not request.can_read_body:
        return {}
    raw = await request.json()
    return {k.rstrip(":"): v for k, v in raw.items()} if isinstance(raw, dict) else {}


def _point_payload(point: ScreenPoint) -> dict:
    return {"coordinates": format_coordinates(point), "x": point.x, "y": point.y}


async def _run_blocking(fn, *args):
    """Element and interface lookups are synchronous; keep them off the event loop."""
    return await asyncio.get_running_loop().run_in_executor(None, fn, *args)


# ─── Point handlers ─────────────────────────────────────────────

async def handle_point_get(request: web.Request) -> web.Response:
    return web.json_response(_point_payload(get_resolver().current()))


async def handle_point_set(request: web.Request) -> web.Response:
    args = await _parse_body(request)
    value = args.get("coordinates")
    if value is None:
        return web.json_response({"error": "Missing 'coordinates' (x,y or a reserved keyword)"}, status=400)

    resolver = get_resolver()
    try:
        point = await _run_blocking(resolver.apply, value)
    except CoordinateParseError as e:
        return web.json_response({
            "error": str(e),
            "current": format_coordinates(resolver.current()),
        }, status=400)
    return web.json_response({"ok": True, **_point_payload(point)})


async def handle_resolve(request: web.Request) -> web.Response:
    args = await _parse_body(request)
    keyword = args.get("keyword", "")
    if not isinstance(keyword, str):
        return web.json_response({"error": f"'keyword' must be a string, got {type(keyword).__name__}"}, status=400)
    point = await _run_blocking(get_resolver().lookup_reserved, keyword)
    resolved = point is not None
    return web.json_response({
        "keyword": keyword,
        "resolved": resolved,
        **_point_payload(point if resolved else ScreenPoint.zero()),
    })


# ─── Element handlers ───────────────────────────────────────────

async def handle_point_element(request: web.Request) -> web.Response:
    resolver = get_resolver()
    point = resolver.current()
    element = await _run_blocking(resolver.element_at, point)
    return web.json_response({
        **_point_payload(point),
        "element": element.to_dict() if element else None,
    })


async def handle_element_at(request: web.Request) -> web.Response:
    args = await _parse_body(request)
    try:
        if "coordinates" in args:
            point = parse_coordinates(args["coordinates"])
        else:
            point = finite_point(args["x"], args["y"])
    except (CoordinateParseError, KeyError) as e:
        return web.json_response({"error": f"Invalid point: {e}"}, status=400)

    element = await _run_blocking(get_resolver().element_at, point)
    return web.json_response({
        **_point_payload(point),
        "element": element.to_dict() if element else None,
    })


# ─── Network & health ───────────────────────────────────────────

async def handle_ip(request: web.Request) -> web.Response:
    try:
        ip = await _run_blocking(ip_address)
    except NoInterfaceError as e:
        return web.json_response({"ip": None, "error": str(e)}, status=404)
    return web.json_response({"ip": ip})


async def handle_health(request: web.Request) -> web.Response:
    try:
        ip = await _run_blocking(ip_address)
    except NoInterfaceError:
        ip = None
    backend_health = await _run_blocking(get_backend().check_health)
    return web.json_response({
        "server": "ok", "daemon": True,
        "element_backend": config.ELEMENT_BACKEND,
        "element": backend_health,
        "display": config.DISPLAY,
        "platform": config.PLATFORM,
        "point": format_coordinates(get_resolver().current()),
        "ip": ip,
    })


# ─── App setup ──────────────────────────────────────────────────

@web.middleware
async def debug_middleware(request: web.Request, handler):
    start = time.time()
    try:
        response = await handler(request)
        debug.log_http(request.method, request.path, response.status, (time.time() - start) * 1000)
        return response
    except Exception:
        debug.log_http(request.method, request.path, 500, (time.time() - start) * 1000)
        raise


def create_app() -> web.Application:
    app = web.Application(middlewares=[debug_middleware])
    # Current point
    app.router.add_get("/point", handle_point_get)
    app.router.add_post("/point", handle_point_set)
    app.router.add_post("/resolve", handle_resolve)
    # Elements
    app.router.add_get("/point/element", handle_point_element)
    app.router.add_post("/element_at", handle_element_at)
    # Network & health
    app.router.add_get("/ip", handle_ip)
    app.router.add_get("/health", handle_health)
    return app


def main():
    import sys as _sys
    enable_debug = "--debug" in _sys.argv or config.DEBUG
    config.ensure_data_dir()
    debug.init(enabled=enable_debug)
    debug.log("DAEMON", f"Starting detection-point daemon on {config.DAEMON_HOST}:{config.DAEMON_PORT}")
    debug.log("DAEMON", f"Display: {config.DISPLAY}, element backend: {config.ELEMENT_BACKEND}, platform: {config.PLATFORM}")
    log.info(f"Starting detection-point daemon on {config.DAEMON_HOST}:{config.DAEMON_PORT} (pid {os.getpid()})")
    app = create_app()

    async def on_cleanup(app):
        from .display import cleanup_all
        cleanup_all()
        debug.close()

    app.on_cleanup.append(on_cleanup)

    web.run_app(app, host=config.DAEMON_HOST, port=config.DAEMON_PORT, print=lambda msg: log.info(msg))


if __name__ == "__main__":
    main()
