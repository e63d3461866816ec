"""
Post persistence - the store contract and its PostgreSQL implementation

Posts are kept as documents: the author is a JSONB object
({"firstName": ..., "lastName": ...}) next to the scalar columns.
"""

import json
import logging
import uuid
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional

import asyncpg

from blog_api.database.connection import POSTS_TABLE, create_pool, close_pool

logger = logging.getLogger(__name__)

# Fields a client is allowed to change after creation
UPDATABLE_FIELDS = ("title", "content")

POST_COLUMNS = "id, author, title, content, created"


class StoreError(Exception):
    """Raised when the backing store fails to complete an operation"""


def parse_post_id(post_id: Any) -> Optional[uuid.UUID]:
    """Parse a post id, returning None when it is not a valid identifier"""
    if isinstance(post_id, uuid.UUID):
        return post_id
    try:
        return uuid.UUID(str(post_id))
    except (ValueError, TypeError, AttributeError):
        return None


def normalize_created(created: Optional[datetime]) -> datetime:
    """Default to now and treat naive timestamps as UTC"""
    if created is None:
        return datetime.now(timezone.utc)
    if created.tzinfo is None:
        return created.replace(tzinfo=timezone.utc)
    return created


class PostStore(ABC):
    """Persistence contract for blog post documents"""

    @abstractmethod
    async def insert_one(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Persist a new post and return it with the generated id."""
        ...

    @abstractmethod
    async def insert_many(self, records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Persist a batch of posts, returned in input order with their ids."""
        ...

    @abstractmethod
    async def find_all(self) -> List[Dict[str, Any]]:
        """All posts, ordered by creation time then id."""
        ...

    @abstractmethod
    async def find_by_id(self, post_id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def find_one(self) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def count(self) -> int:
        ...

    @abstractmethod
    async def update_by_id(self, post_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply title/content changes. Returns None if no post matches."""
        ...

    @abstractmethod
    async def delete_by_id(self, post_id: str) -> bool:
        """Delete a post. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def drop_all(self) -> int:
        """Delete every post and return how many were removed."""
        ...

    @abstractmethod
    async def ping(self) -> bool:
        ...

    @abstractmethod
    async def close(self):
        ...


class PostgresPostStore(PostStore):
    """PostStore backed by an asyncpg connection pool"""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    @classmethod
    async def connect(cls, database_url: str) -> "PostgresPostStore":
        """Open a pool against database_url and wrap it in a store"""
        try:
            pool = await create_pool(database_url)
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            raise StoreError(f"Could not connect to database: {e}") from e
        return cls(pool)

    @property
    def is_closed(self) -> bool:
        return self._pool is None

    @asynccontextmanager
    async def _acquire(self):
        if self._pool is None:
            raise StoreError("Post store is closed")
        try:
            async with self._pool.acquire() as conn:
                yield conn
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            raise StoreError(f"Database operation failed: {e}") from e

    @staticmethod
    def _to_document(row: asyncpg.Record) -> Dict[str, Any]:
        author = row["author"]
        if isinstance(author, str):
            author = json.loads(author)
        return {
            "id": str(row["id"]),
            "author": author,
            "title": row["title"],
            "content": row["content"],
            "created": row["created"],
        }

    @staticmethod
    def _insert_args(record: Dict[str, Any]) -> tuple:
        author = record["author"]
        return (
            uuid.uuid4(),
            json.dumps({"firstName": author["firstName"], "lastName": author["lastName"]}),
            record["title"],
            record["content"],
            normalize_created(record.get("created")),
        )

    async def insert_one(self, record: Dict[str, Any]) -> Dict[str, Any]:
        async with self._acquire() as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO {POSTS_TABLE} ({POST_COLUMNS})
                VALUES ($1, $2::jsonb, $3, $4, $5)
                RETURNING {POST_COLUMNS}
                """,
                *self._insert_args(record)
            )
        return self._to_document(row)

    async def insert_many(self, records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        inserted = []
        async with self._acquire() as conn:
            async with conn.transaction():
                for record in records:
                    row = await conn.fetchrow(
                        f"""
                        INSERT INTO {POSTS_TABLE} ({POST_COLUMNS})
                        VALUES ($1, $2::jsonb, $3, $4, $5)
                        RETURNING {POST_COLUMNS}
                        """,
                        *self._insert_args(record)
                    )
                    inserted.append(self._to_document(row))
        logger.info(f"Inserted {len(inserted)} posts")
        return inserted

    async def find_all(self) -> List[Dict[str, Any]]:
        async with self._acquire() as conn:
            rows = await conn.fetch(
                f"SELECT {POST_COLUMNS} FROM {POSTS_TABLE} ORDER BY created, id"
            )
        return [self._to_document(row) for row in rows]

    async def find_by_id(self, post_id: str) -> Optional[Dict[str, Any]]:
        parsed_id = parse_post_id(post_id)
        if parsed_id is None:
            return None
        async with self._acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT {POST_COLUMNS} FROM {POSTS_TABLE} WHERE id = $1",
                parsed_id
            )
        return self._to_document(row) if row else None

    async def find_one(self) -> Optional[Dict[str, Any]]:
        async with self._acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT {POST_COLUMNS} FROM {POSTS_TABLE} ORDER BY created, id LIMIT 1"
            )
        return self._to_document(row) if row else None

    async def count(self) -> int:
        async with self._acquire() as conn:
            return await conn.fetchval(f"SELECT COUNT(*) FROM {POSTS_TABLE}")

    async def update_by_id(self, post_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        parsed_id = parse_post_id(post_id)
        if parsed_id is None:
            return None

        updates = {key: value for key, value in fields.items() if key in UPDATABLE_FIELDS}
        if not updates:
            return await self.find_by_id(post_id)

        set_clauses = []
        values = [parsed_id]
        for field, value in updates.items():
            values.append(value)
            set_clauses.append(f"{field} = ${len(values)}")

        async with self._acquire() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE {POSTS_TABLE} SET {', '.join(set_clauses)}
                WHERE id = $1
                RETURNING {POST_COLUMNS}
                """,
                *values
            )
        return self._to_document(row) if row else None

    async def delete_by_id(self, post_id: str) -> bool:
        parsed_id = parse_post_id(post_id)
        if parsed_id is None:
            return False
        async with self._acquire() as conn:
            deleted = await conn.fetchval(
                f"DELETE FROM {POSTS_TABLE} WHERE id = $1 RETURNING id",
                parsed_id
            )
        return deleted is not None

    async def drop_all(self) -> int:
        async with self._acquire() as conn:
            status = await conn.execute(f"DELETE FROM {POSTS_TABLE}")
        # status looks like "DELETE 11"
        removed = int(status.split()[-1])
        logger.warning(f"Dropped all posts ({removed} removed)")
        return removed

    async def ping(self) -> bool:
        async with self._acquire() as conn:
            return await conn.fetchval("SELECT 1") == 1

    async def close(self):
        pool, self._pool = self._pool, None
        if pool is not None:
            await close_pool(pool)
