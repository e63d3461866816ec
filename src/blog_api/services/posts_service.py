"""
Posts service - business logic for blog post management
"""

import logging
from datetime import datetime
from typing import Dict, Any, List, Optional

from fastapi import Request

from blog_api.database.post_store import PostStore
from blog_api.services.base_service import BaseService, ServiceResult, INVALID_REQUEST

logger = logging.getLogger(__name__)


class PostsService(BaseService):
    """Service for blog post operations"""

    def __init__(self, store: PostStore):
        super().__init__("posts", store)

    async def list_posts(self) -> ServiceResult:
        """Get every post in stable order"""
        try:
            posts = await self.store.find_all()
        except Exception as e:
            return self._failure("List", e)
        return ServiceResult.ok(posts)

    async def get_post_by_id(self, post_id: str) -> ServiceResult:
        """
        Get a post by its ID

        Args:
            post_id: UUID of the post

        Returns:
            ServiceResult with the post, or RESOURCE_NOT_FOUND
        """
        try:
            post = await self.store.find_by_id(post_id)
        except Exception as e:
            return self._failure("Read", e)
        if post is None:
            return self._not_found(post_id)
        return ServiceResult.ok([post])

    async def create_post(
        self,
        first_name: str,
        last_name: str,
        title: str,
        content: str,
        created: Optional[datetime] = None
    ) -> ServiceResult:
        """
        Create a new post

        Args:
            first_name: Author first name
            last_name: Author last name
            title: Post title
            content: Post body
            created: Creation timestamp (optional, defaults to now)

        Returns:
            ServiceResult with created post data
        """
        record = {
            "author": {"firstName": first_name, "lastName": last_name},
            "title": title,
            "content": content,
            "created": created
        }

        logger.info(f"Creating new post titled: {title!r}")
        try:
            post = await self.store.insert_one(record)
        except Exception as e:
            return self._failure("Create", e)
        return ServiceResult.ok([post])

    async def seed_posts(self, records: List[Dict[str, Any]]) -> ServiceResult:
        """Bulk insert posts, used to seed the store"""
        logger.info(f"Seeding {len(records)} posts")
        try:
            posts = await self.store.insert_many(records)
        except Exception as e:
            return self._failure("Seed", e)
        return ServiceResult.ok(posts)

    async def update_post(
        self,
        post_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None
    ) -> ServiceResult:
        """
        Update the title and/or content of a post

        Args:
            post_id: UUID of the post
            title: New title (optional)
            content: New content (optional)

        Returns:
            ServiceResult with updated post data
        """
        update_data = {}
        if title is not None:
            update_data["title"] = title
        if content is not None:
            update_data["content"] = content

        if not update_data:
            return ServiceResult.fail("No fields provided for update", INVALID_REQUEST)

        logger.info(f"Updating post {post_id} fields: {sorted(update_data)}")
        try:
            post = await self.store.update_by_id(post_id, update_data)
        except Exception as e:
            return self._failure("Update", e)
        if post is None:
            return self._not_found(post_id)
        return ServiceResult.ok([post])

    async def delete_post(self, post_id: str) -> ServiceResult:
        """Delete a post by its ID"""
        logger.info(f"Deleting post {post_id}")
        try:
            deleted = await self.store.delete_by_id(post_id)
        except Exception as e:
            return self._failure("Delete", e)
        if not deleted:
            return self._not_found(post_id)
        return ServiceResult.ok([], count=1)

    async def count_posts(self) -> ServiceResult:
        try:
            total = await self.store.count()
        except Exception as e:
            return self._failure("Count", e)
        return ServiceResult(success=True, data=[], count=total)

    async def clear_posts(self) -> ServiceResult:
        """Remove every post, used to tear the store down"""
        try:
            removed = await self.store.drop_all()
        except Exception as e:
            return self._failure("Drop", e)
        return ServiceResult(success=True, data=[], count=removed)


def get_posts_service(request: Request) -> PostsService:
    """Dependency returning a PostsService bound to the app's store"""
    return PostsService(request.app.state.store)
