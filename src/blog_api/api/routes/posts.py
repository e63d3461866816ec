"""
Blog post API routes
All store access goes through the posts service layer.
"""

import logging
from typing import List
from fastapi import APIRouter, HTTPException, Depends, Response, status

from blog_api.models.post import PostCreateRequest, PostUpdateRequest, PostResponse
from blog_api.services.base_service import ServiceResult, RESOURCE_NOT_FOUND, INVALID_REQUEST
from blog_api.services.posts_service import PostsService, get_posts_service

router = APIRouter()
logger = logging.getLogger(__name__)


def raise_for_result(result: ServiceResult, not_found_detail: str = "Post not found"):
    """Translate a failed ServiceResult into the matching HTTP error"""
    if result.success:
        return
    if result.error_type == RESOURCE_NOT_FOUND:
        raise HTTPException(status_code=404, detail=not_found_detail)
    if result.error_type == INVALID_REQUEST:
        raise HTTPException(status_code=400, detail=result.error)
    raise HTTPException(status_code=500, detail=f"Service error: {result.error}")


@router.get("", response_model=List[PostResponse])
async def list_posts(posts_service: PostsService = Depends(get_posts_service)):
    """List all blog posts"""
    result = await posts_service.list_posts()
    raise_for_result(result)
    return [PostResponse.from_document(post) for post in result.data]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: str, posts_service: PostsService = Depends(get_posts_service)):
    """Get a single blog post"""
    result = await posts_service.get_post_by_id(post_id)
    raise_for_result(result)
    return PostResponse.from_document(result.data[0])


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: PostCreateRequest,
    posts_service: PostsService = Depends(get_posts_service)
):
    """Create a new blog post"""
    result = await posts_service.create_post(
        first_name=request.author.firstName,
        last_name=request.author.lastName,
        title=request.title,
        content=request.content,
        created=request.created
    )
    raise_for_result(result)
    return PostResponse.from_document(result.data[0])


@router.put("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_post(
    post_id: str,
    request: PostUpdateRequest,
    posts_service: PostsService = Depends(get_posts_service)
):
    """Update the title and/or content of a blog post"""
    if request.id != post_id:
        message = f"Request path id ({post_id}) and request body id ({request.id}) must match"
        logger.warning(message)
        raise HTTPException(status_code=400, detail=message)

    result = await posts_service.update_post(
        post_id,
        title=request.title,
        content=request.content
    )
    raise_for_result(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(post_id: str, posts_service: PostsService = Depends(get_posts_service)):
    """Delete a blog post"""
    result = await posts_service.delete_post(post_id)
    raise_for_result(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
