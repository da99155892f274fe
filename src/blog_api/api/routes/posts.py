"""
Post management API routes
All database operations go through the posts service.
"""

from typing import List, Optional
from fastapi import APIRouter, HTTPException, Depends, Query

from blog_api.models.enums import ErrorType
from blog_api.models.post import PostWriteRequest, PostResponse, DeleteResponse
from blog_api.services.posts_service import PostsService, ServiceResult, get_posts_service

router = APIRouter()

STATUS_BY_ERROR_TYPE = {
    ErrorType.VALIDATION_ERROR: 400,
    ErrorType.RESOURCE_NOT_FOUND: 404,
    ErrorType.DATABASE_ERROR: 500,
}

def raise_for_failure(result: ServiceResult) -> None:
    """Translate a failed service result into the matching HTTP error"""
    if result.success:
        return
    status_code = STATUS_BY_ERROR_TYPE.get(result.error_type, 500)
    raise HTTPException(status_code=status_code, detail=result.error or "Service error")

@router.get("", response_model=List[PostResponse])
async def list_posts(
    search: Optional[str] = Query(None, description="Case-insensitive match on title, content or tags"),
    category: Optional[str] = Query(None, description="Exact category"),
    posts_service: PostsService = Depends(get_posts_service)
):
    """List posts, newest first"""
    result = await posts_service.list_posts(search=search, category=category)
    raise_for_failure(result)
    return result.data

@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    posts_service: PostsService = Depends(get_posts_service)
):
    """Get a single post"""
    result = await posts_service.get_post(post_id)
    raise_for_failure(result)
    return result.data[0]

@router.post("", status_code=201, response_model=PostResponse)
async def create_post(
    request: PostWriteRequest,
    posts_service: PostsService = Depends(get_posts_service)
):
    """Create a new post"""
    result = await posts_service.create_post(request)
    raise_for_failure(result)
    return result.data[0]

@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    request: PostWriteRequest,
    posts_service: PostsService = Depends(get_posts_service)
):
    """Replace all fields of an existing post"""
    result = await posts_service.update_post(post_id, request)
    raise_for_failure(result)
    return result.data[0]

@router.delete("/{post_id}", response_model=DeleteResponse)
async def delete_post(
    post_id: str,
    posts_service: PostsService = Depends(get_posts_service)
):
    """Delete a post"""
    result = await posts_service.delete_post(post_id)
    raise_for_failure(result)
    return {"message": "Post deleted successfully"}
