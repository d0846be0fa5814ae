"""HTTP surface of the oracle node."""

import logging

from aiohttp import web

logger = logging.getLogger(__name__)

API_MESSAGE = "An API for use with your Dapp!"


async def handle_api(request: web.Request) -> web.Response:
    """Liveness: always 200 with a message."""
    return web.json_response({"message": API_MESSAGE})


def create_app() -> web.Application:
    app = web.Application()
    app.add_routes([web.get("/api", handle_api)])
    return app


async def start_server(host: str = "0.0.0.0", port: int = 3000) -> web.AppRunner:
    """Serve the app in the background; call `cleanup()` on the runner to stop."""
    runner = web.AppRunner(create_app())
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    logger.info("API listening on http://%s:%d/api", host, port)
    return runner
