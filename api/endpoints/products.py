"""Product endpoints"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from core.auth import get_current_user_id
from core.dependencies import get_storage
from core.logging import logger
from database.entities import Product
from database.repository import StorageRepository
from api.dependencies import MessageResponse, ProductRequest, parse_payload


router = APIRouter()


@router.post("/products", response_model=Product)
async def create_product(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> Product:
    """
    Register a product owned by the caller

    Raises:
        HTTPException: 400 if the body is not a valid product
    """
    data = await parse_payload(request, ProductRequest, "Invalid product data")

    try:
        product = storage.create_product(user_id, data)
    except Exception as e:
        logger.error(f"❌ Product save failed (user={user_id}): {str(e)}")
        raise HTTPException(status_code=500, detail="Server error")

    logger.info(f"✅ Product created: {product.name} ({product.id})")
    return product


@router.get("/products", response_model=List[Product])
async def list_products(
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> List[Product]:
    return storage.get_user_products(user_id)


@router.get("/products/{product_id}", response_model=Product)
async def get_product(
    product_id: str,
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> Product:
    """Fetch any product by id (products are readable by every signed-in user)"""
    product = storage.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.delete("/products/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> MessageResponse:
    """
    Delete one of the caller's products

    Another user's product is reported as not found.
    """
    product = storage.get_product(product_id)
    if not product or product.user_id != user_id:
        raise HTTPException(status_code=404, detail="Product not found")

    try:
        storage.delete_product(product_id)
    except Exception as e:
        logger.error(f"❌ Product delete failed ({product_id}): {str(e)}")
        raise HTTPException(status_code=500, detail="Server error")

    logger.info(f"🗑️ Product deleted: {product_id}")
    return MessageResponse(message="Product deleted")
