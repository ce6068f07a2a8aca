"""Favorite product endpoints"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from core.auth import get_current_user_id
from core.dependencies import get_storage
from core.exceptions import DuplicateFavoriteException
from core.logging import logger, log_structured
from database.entities import Favorite, FavoriteWithProduct
from database.repository import StorageRepository
from api.dependencies import FavoriteRequest, MessageResponse, parse_payload


router = APIRouter()


@router.post("/favorites", response_model=Favorite)
async def add_favorite(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> Favorite:
    """
    Add a product to the caller's favorites

    Raises:
        HTTPException: 400 for an invalid body or a product already favorited
    """
    data = await parse_payload(request, FavoriteRequest, "Failed to add favorite")

    try:
        favorite = storage.add_to_favorites(user_id, data.product_id)
    except DuplicateFavoriteException:
        raise HTTPException(status_code=400, detail="Product already in favorites")
    except Exception as e:
        logger.error(f"❌ Favorite save failed (user={user_id}): {str(e)}")
        raise HTTPException(status_code=400, detail="Failed to add favorite")

    log_structured("favorite_added", {"user_id": user_id, "product_id": data.product_id})
    return favorite


@router.delete("/favorites/{product_id}", response_model=MessageResponse)
async def remove_favorite(
    product_id: str,
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> MessageResponse:
    """Remove a product from the caller's favorites (no error if it was not there)"""
    try:
        storage.remove_from_favorites(user_id, product_id)
    except Exception as e:
        logger.error(f"❌ Favorite delete failed (user={user_id}): {str(e)}")
        raise HTTPException(status_code=500, detail="Server error")

    return MessageResponse(message="Removed from favorites")


@router.get("/favorites", response_model=List[FavoriteWithProduct])
async def list_favorites(
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> List[FavoriteWithProduct]:
    return storage.get_user_favorites(user_id)
