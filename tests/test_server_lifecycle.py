"""
Lifecycle tests - the server binds a real listener and tears it down
"""

import httpx
import pytest

from blog_api.server import BlogServer, running_server


@pytest.mark.asyncio
async def test_run_and_close_server(seeded_store):
    server = BlogServer(store=seeded_store)

    await server.run_server()
    try:
        assert server.is_running
        assert server.port > 0
        async with httpx.AsyncClient(base_url=server.base_url) as client:
            response = await client.get("/posts")
        assert response.status_code == 200
        assert len(response.json()) == await seeded_store.count()
    finally:
        await server.close_server()

    assert not server.is_running
    # A store handed in by the caller stays open
    assert not seeded_store.closed


@pytest.mark.asyncio
async def test_run_and_close_are_idempotent(store):
    server = BlogServer(store=store)

    await server.run_server()
    port = server.port
    await server.run_server()
    assert server.port == port

    await server.close_server()
    await server.close_server()
    assert not server.is_running


@pytest.mark.asyncio
async def test_running_server_always_closes(store):
    with pytest.raises(RuntimeError, match="boom"):
        async with running_server(store=store) as server:
            assert server.is_running
            raise RuntimeError("boom")

    assert not server.is_running
