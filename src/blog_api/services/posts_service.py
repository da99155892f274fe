"""
Posts service - storage operations for blog posts
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import asyncpg

from blog_api.database.connection import get_db_pool
from blog_api.models.enums import ErrorType
from blog_api.models.post import PostWriteRequest, format_post
from blog_api.services.query_builder import (
    PostListQuery,
    build_categories_query,
    build_delete_query,
    build_insert_query,
    build_select_by_id_query,
    build_update_query,
)

logger = logging.getLogger(__name__)

# posts.id is a SERIAL (int4) column
MAX_POST_ID = 2**31 - 1

@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Any]] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[ErrorType] = None

    @classmethod
    def ok(cls, data: List[Any]) -> "ServiceResult":
        return cls(success=True, data=data, count=len(data))

    @classmethod
    def failed(cls, error_type: ErrorType, error: str) -> "ServiceResult":
        return cls(success=False, error=error, error_type=error_type)


def parse_post_id(post_id: Any) -> Optional[int]:
    """Return the post id as an int, or None when it cannot name a stored post"""
    try:
        value = int(str(post_id).strip())
    except (TypeError, ValueError):
        return None
    if value < 1 or value > MAX_POST_ID:
        return None
    return value


class PostsService:
    """Service for blog post operations"""

    NOT_FOUND_MESSAGE = "Post not found"
    MISSING_FIELDS_MESSAGE = "Missing required fields"

    async def list_posts(self, search: Optional[str] = None, category: Optional[str] = None) -> ServiceResult:
        """
        List posts matching an optional filter, newest first

        Args:
            search: Case-insensitive substring of title, content or tags
            category: Exact category to match

        Returns:
            ServiceResult with the matching posts in JSON shape
        """
        if any(value and "\x00" in value for value in (search, category)):
            # Stored text never contains NUL, and PostgreSQL rejects it as a parameter
            return ServiceResult.ok([])

        query, params = PostListQuery.from_filter(search, category).build()
        try:
            rows = await self._fetch(query, params)
        except Exception as e:
            return self._database_failure("List", e)
        return ServiceResult.ok([format_post(row) for row in rows])

    async def get_post(self, post_id: Any) -> ServiceResult:
        """
        Get a single post by id

        Args:
            post_id: Post id as given in the request path

        Returns:
            ServiceResult with one post, or RESOURCE_NOT_FOUND
        """
        record_id = parse_post_id(post_id)
        if record_id is None:
            return ServiceResult.failed(ErrorType.RESOURCE_NOT_FOUND, self.NOT_FOUND_MESSAGE)

        try:
            row = await self._fetchrow(*build_select_by_id_query(record_id))
        except Exception as e:
            return self._database_failure("Get", e)

        if row is None:
            return ServiceResult.failed(ErrorType.RESOURCE_NOT_FOUND, self.NOT_FOUND_MESSAGE)
        return ServiceResult.ok([format_post(row)])

    async def create_post(self, request: PostWriteRequest) -> ServiceResult:
        """
        Create a post, then read it back by its new id

        The read is a separate statement issued only after the insert
        transaction has committed.

        Args:
            request: Post fields from the request body

        Returns:
            ServiceResult with the created post
        """
        missing = request.missing_required_fields()
        if missing:
            logger.info(f"Rejected post creation, missing fields: {missing}")
            return ServiceResult.failed(ErrorType.VALIDATION_ERROR, self.MISSING_FIELDS_MESSAGE)

        query, params = build_insert_query(request.to_record())
        try:
            new_id = await self._fetchval_in_transaction(query, params)
            if new_id is None:
                raise RuntimeError("Insert operation failed - no id returned")
            logger.info(f"Created post {new_id} by {request.authorId}")
            row = await self._fetchrow(*build_select_by_id_query(new_id))
        except Exception as e:
            return self._database_failure("Create", e)

        if row is None:
            # Deleted by another request between the insert and the read
            return ServiceResult.failed(ErrorType.RESOURCE_NOT_FOUND, self.NOT_FOUND_MESSAGE)
        return ServiceResult.ok([format_post(row)])

    async def update_post(self, post_id: Any, request: PostWriteRequest) -> ServiceResult:
        """
        Replace every mutable field of a post and refresh its updatedAt

        Args:
            post_id: Post id as given in the request path
            request: Post fields from the request body

        Returns:
            ServiceResult with the updated post
        """
        missing = request.missing_required_fields()
        if missing:
            logger.info(f"Rejected update of post {post_id}, missing fields: {missing}")
            return ServiceResult.failed(ErrorType.VALIDATION_ERROR, self.MISSING_FIELDS_MESSAGE)

        record_id = parse_post_id(post_id)
        if record_id is None:
            return ServiceResult.failed(ErrorType.RESOURCE_NOT_FOUND, self.NOT_FOUND_MESSAGE)

        query, params = build_update_query(record_id, request.to_record())
        try:
            updated_id = await self._fetchval_in_transaction(query, params)
            if updated_id is None:
                return ServiceResult.failed(ErrorType.RESOURCE_NOT_FOUND, self.NOT_FOUND_MESSAGE)
            logger.info(f"Updated post {updated_id}")
            row = await self._fetchrow(*build_select_by_id_query(updated_id))
        except Exception as e:
            return self._database_failure("Update", e)

        if row is None:
            return ServiceResult.failed(ErrorType.RESOURCE_NOT_FOUND, self.NOT_FOUND_MESSAGE)
        return ServiceResult.ok([format_post(row)])

    async def delete_post(self, post_id: Any) -> ServiceResult:
        """Hard-delete a post; RESOURCE_NOT_FOUND when no row matched"""
        record_id = parse_post_id(post_id)
        if record_id is None:
            return ServiceResult.failed(ErrorType.RESOURCE_NOT_FOUND, self.NOT_FOUND_MESSAGE)

        query, params = build_delete_query(record_id)
        try:
            status = await self._execute_in_transaction(query, params)
        except Exception as e:
            return self._database_failure("Delete", e)

        # asyncpg returns "DELETE N" where N is the number of rows
        deleted_count = int(status.split()[-1]) if status else 0
        if deleted_count == 0:
            return ServiceResult.failed(ErrorType.RESOURCE_NOT_FOUND, self.NOT_FOUND_MESSAGE)

        logger.info(f"Deleted post {record_id}")
        return ServiceResult(success=True, data=[], count=deleted_count)

    async def list_categories(self) -> ServiceResult:
        """Distinct categories currently in use, sorted ascending"""
        try:
            rows = await self._fetch(*build_categories_query())
        except Exception as e:
            return self._database_failure("List categories", e)
        return ServiceResult.ok([row["category"] for row in rows])

    # Direct SQL execution helpers

    def _get_pool(self):
        db_pool = get_db_pool()
        if not db_pool:
            raise RuntimeError("Database pool not initialized")
        return db_pool

    async def _fetch(self, query: str, params: List[Any]) -> List[Dict[str, Any]]:
        logger.info(f"Executing READ query: {query}")
        logger.info(f"Parameters: {params}")
        async with self._get_pool().acquire() as conn:
            try:
                rows = await conn.fetch(query, *params)
            except asyncpg.PostgresError as e:
                logger.error(f"Database error: {e}")
                raise RuntimeError(f"Database query failed: {str(e)}")
        return [dict(row) for row in rows]

    async def _fetchrow(self, query: str, params: List[Any]) -> Optional[Dict[str, Any]]:
        logger.info(f"Executing READ query: {query}")
        logger.info(f"Parameters: {params}")
        async with self._get_pool().acquire() as conn:
            try:
                row = await conn.fetchrow(query, *params)
            except asyncpg.PostgresError as e:
                logger.error(f"Database error: {e}")
                raise RuntimeError(f"Database query failed: {str(e)}")
        return dict(row) if row is not None else None

    async def _fetchval_in_transaction(self, query: str, params: List[Any]) -> Any:
        logger.info(f"Executing WRITE: {query}")
        logger.info(f"Parameters: {params}")
        async with self._get_pool().acquire() as conn:
            try:
                async with conn.transaction():
                    return await conn.fetchval(query, *params)
            except asyncpg.PostgresError as e:
                logger.error(f"Database error during write: {e}")
                raise RuntimeError(f"Database write failed: {str(e)}")

    async def _execute_in_transaction(self, query: str, params: List[Any]) -> str:
        logger.info(f"Executing WRITE: {query}")
        logger.info(f"Parameters: {params}")
        async with self._get_pool().acquire() as conn:
            try:
                async with conn.transaction():
                    return await conn.execute(query, *params)
            except asyncpg.PostgresError as e:
                logger.error(f"Database error during write: {e}")
                raise RuntimeError(f"Database write failed: {str(e)}")

    def _database_failure(self, operation: str, error: Exception) -> ServiceResult:
        logger.error(f"{operation} operation failed for posts: {error}", exc_info=True)
        return ServiceResult.failed(ErrorType.DATABASE_ERROR, str(error))


# Global service instance
_posts_service: Optional[PostsService] = None

def get_posts_service() -> PostsService:
    """Get the global posts service instance"""
    global _posts_service
    if _posts_service is None:
        _posts_service = PostsService()
    return _posts_service
