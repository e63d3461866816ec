"""
Base service layer for unified store operations
"""

import logging
from typing import Dict, Any, List, Optional
from dataclasses import dataclass

from blog_api.database.post_store import PostStore, StoreError

logger = logging.getLogger(__name__)

# Error types reported in ServiceResult.error_type
RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
INVALID_REQUEST = "INVALID_REQUEST"
DATABASE_ERROR = "DATABASE_ERROR"
EXECUTION_ERROR = "EXECUTION_ERROR"


@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def ok(cls, data: List[Dict[str, Any]], count: Optional[int] = None) -> "ServiceResult":
        return cls(success=True, data=data, count=len(data) if count is None else count)

    @classmethod
    def fail(cls, error: str, error_type: str) -> "ServiceResult":
        return cls(success=False, error=error, error_type=error_type)


class BaseService:
    """Base service that wraps a store and converts failures into ServiceResults"""

    def __init__(self, resource_name: str, store: PostStore):
        self.resource_name = resource_name
        self.store = store

    def _failure(self, operation: str, exc: Exception) -> ServiceResult:
        """Log a failed store call and wrap it as a result"""
        logger.error(f"{operation} operation failed for {self.resource_name}: {exc}", exc_info=True)
        if isinstance(exc, StoreError):
            return ServiceResult.fail(str(exc), DATABASE_ERROR)
        return ServiceResult.fail(str(exc), EXECUTION_ERROR)

    def _not_found(self, record_id: str) -> ServiceResult:
        return ServiceResult.fail(
            f"{self.resource_name} record not found: {record_id}",
            RESOURCE_NOT_FOUND
        )
