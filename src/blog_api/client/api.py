"""
Async HTTP client for the Blog Posts API
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000/api"
GENERIC_ERROR_MESSAGE = "Request failed"


class ApiError(Exception):
    """Non-success response (or transport failure) from the API"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def error_message(response: httpx.Response, fallback: str = GENERIC_ERROR_MESSAGE) -> str:
    """Extract the {"error": ...} message of a failed response"""
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return fallback


class PostsApiClient:
    """Thin wrapper over httpx.AsyncClient exposing one method per endpoint"""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0
    ):
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> "PostsApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, fallback: str = GENERIC_ERROR_MESSAGE, **kwargs) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiError(str(e) or fallback) from e

        if response.is_success:
            return response.json()

        message = error_message(response, fallback)
        logger.info(f"{method} {path} -> {response.status_code}: {message}")
        raise ApiError(message, response.status_code)

    async def health_check(self) -> bool:
        try:
            body = await self._request("GET", "/health")
        except ApiError:
            return False
        return body.get("status") == "ok"

    async def list_posts(self, search: Optional[str] = None, category: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {}
        if search:
            params["search"] = search
        if category:
            params["category"] = category
        return await self._request("GET", "/posts", fallback="Failed to load posts", params=params)

    async def get_post(self, post_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/posts/{post_id}", fallback="Post not found")

    async def create_post(self, post: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/posts", fallback="Failed to create post", json=post)

    async def update_post(self, post_id: int, post: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/posts/{post_id}", fallback="Failed to update post", json=post)

    async def delete_post(self, post_id: int) -> str:
        body = await self._request("DELETE", f"/posts/{post_id}", fallback="Failed to delete post")
        return body.get("message", "")

    async def list_categories(self) -> List[str]:
        return await self._request("GET", "/categories", fallback="Failed to load categories")
