"""
Recommendation feed operations

- Seeding a user's feed with the static sample recommendations
- Turning a recommendation into a favorited product
"""

from typing import List, Tuple

from database.entities import Favorite, Product, ProductData, Recommendation
from database.repository import StorageRepository
from services.sample_data import SAMPLE_RECOMMENDATIONS
from core.logging import logger, log_structured


def seed_sample_recommendations(storage: StorageRepository, user_id: str) -> List[Recommendation]:
    """
    Give a user the sample feed if they have no recommendations yet

    Returns:
        The user's recommendations, newest first
    """
    existing = storage.get_user_recommendations(user_id)
    if existing:
        logger.info(f"ℹ️  Recommendations already present for user {user_id} ({len(existing)}), skipping seed")
        return existing

    for sample in SAMPLE_RECOMMENDATIONS:
        storage.create_recommendation(user_id, sample)

    log_structured("recommendations_seeded", {
        "user_id": user_id,
        "count": len(SAMPLE_RECOMMENDATIONS),
        "backend": storage.backend_name
    })

    return storage.get_user_recommendations(user_id)


def product_from_recommendation(recommendation: Recommendation) -> ProductData:
    return ProductData(
        name=recommendation.product_name,
        brand=recommendation.brand,
        image_url=recommendation.image_url,
        description=recommendation.reason,
        size=recommendation.size,
    )


def favorite_recommendation(
    storage: StorageRepository,
    user_id: str,
    recommendation: Recommendation
) -> Tuple[Product, Favorite]:
    """
    Create a product from a recommendation and add it to the user's favorites

    The two writes are not atomic. If the favorite cannot be stored the
    product created for it is deleted again before the error propagates.

    Raises:
        Exception: whatever the favorite write raised
    """
    product = storage.create_product(user_id, product_from_recommendation(recommendation))

    try:
        favorite = storage.add_to_favorites(user_id, product.id)
    except Exception as e:
        logger.error(f"❌ Favorite write failed, removing product {product.id}: {str(e)}")
        try:
            storage.delete_product(product.id)
        except Exception as rollback_error:
            logger.error(f"❌ Rollback failed, product {product.id} is orphaned: {str(rollback_error)}")
        raise

    log_structured("favorite_added", {
        "user_id": user_id,
        "product_id": product.id,
        "recommendation_id": recommendation.id
    })

    return product, favorite
