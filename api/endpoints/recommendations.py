"""Recommendation feed endpoints"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from core.auth import get_current_user_id
from core.dependencies import get_storage
from core.logging import logger
from database.entities import FavoriteWithProduct, Recommendation
from database.repository import StorageRepository
from services.recommendation_service import favorite_recommendation, seed_sample_recommendations
from api.dependencies import RecommendationRequest, parse_payload


router = APIRouter()


@router.get("/recommendations", response_model=List[Recommendation])
async def list_recommendations(
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> List[Recommendation]:
    """The caller's recommendations, newest first"""
    return storage.get_user_recommendations(user_id)


@router.post("/recommendations", response_model=Recommendation)
async def create_recommendation(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> Recommendation:
    """
    Store a recommendation for the caller

    Raises:
        HTTPException: 400 if the body is not a valid recommendation
    """
    data = await parse_payload(request, RecommendationRequest, "Invalid recommendation data")

    try:
        return storage.create_recommendation(user_id, data)
    except Exception as e:
        logger.error(f"❌ Recommendation save failed (user={user_id}): {str(e)}")
        raise HTTPException(status_code=500, detail="Server error")


@router.post("/recommendations/samples", response_model=List[Recommendation])
async def seed_recommendations(
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> List[Recommendation]:
    """Fill an empty feed with the sample recommendations and return the feed"""
    try:
        return seed_sample_recommendations(storage, user_id)
    except Exception as e:
        logger.error(f"❌ Sample recommendation seed failed (user={user_id}): {str(e)}")
        raise HTTPException(status_code=500, detail="Server error")


@router.post("/recommendations/{recommendation_id}/favorite", response_model=FavoriteWithProduct)
async def favorite_from_recommendation(
    recommendation_id: str,
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> FavoriteWithProduct:
    """
    Save a recommended item as a product and favorite it

    Raises:
        HTTPException: 404 if the recommendation is not the caller's,
            500 if the favorite could not be stored (the product is rolled back)
    """
    recommendation = storage.get_recommendation(recommendation_id)
    if not recommendation or recommendation.user_id != user_id:
        raise HTTPException(status_code=404, detail="Recommendation not found")

    try:
        product, favorite = favorite_recommendation(storage, user_id, recommendation)
    except Exception as e:
        logger.error(f"❌ Favorite from recommendation failed ({recommendation_id}): {str(e)}")
        raise HTTPException(status_code=500, detail="Server error")

    return FavoriteWithProduct(product=product, **favorite.model_dump())
