"""
In-memory PostStore used by the endpoint tests
"""

import copy
import uuid
from typing import Dict, Any, List, Optional

from blog_api.database.post_store import (
    PostStore, StoreError, UPDATABLE_FIELDS, normalize_created, parse_post_id
)


class InMemoryPostStore(PostStore):
    """Dict-backed store; set fail_with to make every call raise StoreError"""

    def __init__(self):
        self.posts: Dict[str, Dict[str, Any]] = {}
        self.closed = False
        self.fail_with: Optional[str] = None

    def _check(self):
        if self.fail_with:
            raise StoreError(self.fail_with)
        if self.closed:
            raise StoreError("Post store is closed")

    def _ordered(self) -> List[Dict[str, Any]]:
        return sorted(self.posts.values(), key=lambda post: (post["created"], post["id"]))

    async def insert_one(self, record: Dict[str, Any]) -> Dict[str, Any]:
        self._check()
        post = {
            "id": str(uuid.uuid4()),
            "author": {
                "firstName": record["author"]["firstName"],
                "lastName": record["author"]["lastName"]
            },
            "title": record["title"],
            "content": record["content"],
            "created": normalize_created(record.get("created"))
        }
        self.posts[post["id"]] = post
        return copy.deepcopy(post)

    async def insert_many(self, records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return [await self.insert_one(record) for record in records]

    async def find_all(self) -> List[Dict[str, Any]]:
        self._check()
        return copy.deepcopy(self._ordered())

    async def find_by_id(self, post_id: str) -> Optional[Dict[str, Any]]:
        self._check()
        parsed_id = parse_post_id(post_id)
        if parsed_id is None:
            return None
        post = self.posts.get(str(parsed_id))
        return copy.deepcopy(post) if post else None

    async def find_one(self) -> Optional[Dict[str, Any]]:
        self._check()
        ordered = self._ordered()
        return copy.deepcopy(ordered[0]) if ordered else None

    async def count(self) -> int:
        self._check()
        return len(self.posts)

    async def update_by_id(self, post_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self._check()
        parsed_id = parse_post_id(post_id)
        if parsed_id is None or str(parsed_id) not in self.posts:
            return None
        post = self.posts[str(parsed_id)]
        post.update({key: value for key, value in fields.items() if key in UPDATABLE_FIELDS})
        return copy.deepcopy(post)

    async def delete_by_id(self, post_id: str) -> bool:
        self._check()
        parsed_id = parse_post_id(post_id)
        if parsed_id is None:
            return False
        return self.posts.pop(str(parsed_id), None) is not None

    async def drop_all(self) -> int:
        self._check()
        removed = len(self.posts)
        self.posts.clear()
        return removed

    async def ping(self) -> bool:
        self._check()
        return True

    async def close(self):
        self.closed = True
