"""
pytest configuration and fixtures for the blog API suite
Seeds the store before each test and tears it down afterwards.
"""

import logging

import httpx
import pytest
import pytest_asyncio

from blog_api.app import create_app
from blog_api.services.posts_service import PostsService
from data_factory import PostDataFactory, SEED_POST_COUNT
from memory_store import InMemoryPostStore

logger = logging.getLogger(__name__)



@pytest.fixture
def factory() -> PostDataFactory:
    return PostDataFactory()


@pytest_asyncio.fixture
async def store():
    """Fresh in-memory store, closed after the test"""
    store = InMemoryPostStore()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def seeded_store(store, factory):
    """Store seeded with SEED_POST_COUNT posts, emptied after the test"""
    posts_service = PostsService(store)
    logger.info("Seeding blog data")
    seeded = await posts_service.seed_posts(factory.generate_posts(SEED_POST_COUNT))
    assert seeded.success, f"Seeding failed: {seeded.error}"
    try:
        yield store
    finally:
        logger.warning("Deleting blog data")
        store.fail_with = None
        cleared = await posts_service.clear_posts()
        assert cleared.success, f"Teardown failed: {cleared.error}"


@pytest_asyncio.fixture
async def client(seeded_store):
    """HTTP client talking to the app in-process"""
    app = create_app(store=seeded_store)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
