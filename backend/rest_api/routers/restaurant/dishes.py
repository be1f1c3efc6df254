"""
Dish endpoints and dish image storage.

The image routes live on their own router, included before the
restaurant-scoped one so that /Dish/upload is not read as a restaurant id.
"""

import asyncio

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from rest_api.schemas.common import MessageResponse
from rest_api.schemas.dish import DishCreate, DishOutput, DishUpdate, ImageUploadResponse, ImageUrlResponse
from rest_api.services.domain import DishService
from rest_api.services.storage import get_storage
from shared.config.logging import rest_api_logger as logger
from shared.config.settings import settings
from shared.infrastructure.db import get_db
from shared.utils.exceptions import NotFoundError, ValidationError
from shared.utils.validators import is_allowed_image

image_router = APIRouter(prefix="/Dish", tags=["dish-images"])
router = APIRouter(prefix="/Dish/{restaurant_id}", tags=["dish"])


# =============================================================================
# Images
# =============================================================================


@image_router.post("/upload", response_model=ImageUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_dish_image(image: UploadFile | None = File(default=None)) -> ImageUploadResponse:
    """Store one image through the configured storage backend."""
    if image is None or not image.filename:
        raise ValidationError("No image file provided")
    if not is_allowed_image(image.filename, image.content_type):
        raise ValidationError("Only image files are allowed", content_type=image.content_type)

    data = await image.read()
    if not data:
        raise ValidationError("Uploaded file is empty")
    if len(data) > settings.max_upload_bytes:
        raise ValidationError(
            f"Image exceeds the {settings.max_upload_bytes // (1024 * 1024)} MB limit", size=len(data)
        )

    storage = get_storage()
    file_name = await asyncio.to_thread(storage.save, image.filename, data, image.content_type)
    url = await asyncio.to_thread(storage.url, file_name)
    logger.info("Dish image uploaded", file_name=file_name, size=len(data))
    return ImageUploadResponse(fileName=file_name, url=url)


@image_router.get("/image-url/{file_name}", response_model=ImageUrlResponse)
async def get_dish_image_url(file_name: str) -> ImageUrlResponse:
    storage = get_storage()
    if not await asyncio.to_thread(storage.exists, file_name):
        raise NotFoundError("Image", file_name, detail="Image not found")
    url = await asyncio.to_thread(storage.url, file_name)
    expires_in = settings.s3_url_expiry if settings.storage_backend == "s3" else None
    return ImageUrlResponse(fileName=file_name, url=url, expiresIn=expires_in)


# =============================================================================
# Dishes
# =============================================================================


@router.get("", response_model=list[DishOutput])
def list_dishes(restaurant_id: str, db: Session = Depends(get_db)) -> list[DishOutput]:
    return DishService(db).list_menu(restaurant_id)


@router.get("/{dish_id}", response_model=DishOutput)
def get_dish(restaurant_id: str, dish_id: str, db: Session = Depends(get_db)) -> DishOutput:
    return DishService(db).get_by_id(dish_id, restaurant_id)


@router.post("", response_model=DishOutput, status_code=status.HTTP_201_CREATED)
def create_dish(restaurant_id: str, body: DishCreate, db: Session = Depends(get_db)) -> DishOutput:
    return DishService(db).create(body.model_dump(exclude_none=True), restaurant_id)


@router.put("/{dish_id}", response_model=DishOutput)
def update_dish(
    restaurant_id: str,
    dish_id: str,
    body: DishUpdate,
    db: Session = Depends(get_db),
) -> DishOutput:
    return DishService(db).update(dish_id, body.model_dump(exclude_unset=True), restaurant_id)


@router.delete("/{dish_id}", response_model=MessageResponse)
def delete_dish(restaurant_id: str, dish_id: str, db: Session = Depends(get_db)) -> MessageResponse:
    DishService(db).delete(dish_id, restaurant_id)
    return MessageResponse(message="Dish deleted successfully")
