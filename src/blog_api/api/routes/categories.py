"""
Category listing API route
"""

from typing import List
from fastapi import APIRouter, HTTPException, Depends

from blog_api.services.posts_service import PostsService, get_posts_service

router = APIRouter()

@router.get("", response_model=List[str])
async def list_categories(
    posts_service: PostsService = Depends(get_posts_service)
):
    """Distinct categories of the stored posts, sorted ascending"""
    result = await posts_service.list_categories()

    if not result.success:
        raise HTTPException(status_code=500, detail=result.error)

    return result.data
