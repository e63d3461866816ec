"""
Server lifecycle control - start and stop the API against a given store
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn

from blog_api.app import create_app
from blog_api.database.post_store import PostStore

logger = logging.getLogger(__name__)


class BlogServer:
    """Runs the API under uvicorn inside the current event loop"""

    def __init__(self, host: str = "127.0.0.1", port: int = 0, store: Optional[PostStore] = None):
        self.host = host
        self.requested_port = port
        self.store = store
        self.app = None
        self._server: Optional[uvicorn.Server] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._server is not None

    @property
    def port(self) -> int:
        """Bound port; resolves port 0 to the one picked by the OS"""
        if not self.is_running or not self._server.servers:
            return self.requested_port
        return self._server.servers[0].sockets[0].getsockname()[1]

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    async def _serve(self, server: uvicorn.Server):
        try:
            await server.serve()
        except SystemExit as e:
            # uvicorn exits the process when it cannot bind
            raise RuntimeError(f"Server exited during startup (code {e.code})") from e

    async def run_server(self, database_url: Optional[str] = None):
        """Open the store, bind the listener and return once it accepts requests"""
        if self.is_running:
            logger.info("Server already running")
            return

        self.app = create_app(database_url=database_url, store=self.store)
        config = uvicorn.Config(
            self.app,
            host=self.host,
            port=self.requested_port,
            lifespan="on",
            log_level="warning"
        )
        server = uvicorn.Server(config)
        task = asyncio.create_task(self._serve(server))

        while not server.started:
            if task.done():
                # Startup failed: either an exception or a lifespan failure
                task.result()
                raise RuntimeError("Server failed to start")
            await asyncio.sleep(0.05)

        self._server = server
        self._task = task
        logger.info(f"Blog API listening on {self.base_url}")

    async def close_server(self):
        """Stop the listener and close the store, returning once torn down"""
        if not self.is_running:
            return

        server, task = self._server, self._task
        server.should_exit = True
        try:
            await task
        finally:
            self._server = None
            self._task = None
            self.app = None
        logger.info("Blog API stopped")


@asynccontextmanager
async def running_server(
    database_url: Optional[str] = None,
    host: str = "127.0.0.1",
    port: int = 0,
    store: Optional[PostStore] = None
):
    """Run a BlogServer for the duration of the block, always closing it"""
    server = BlogServer(host=host, port=port, store=store)
    await server.run_server(database_url)
    try:
        yield server
    finally:
        await server.close_server()
