"""
Dish schemas.
"""

from pydantic import BaseModel, Field

from .common import ALIASED


class DishOutput(BaseModel):
    dish_id: str = Field(alias="Dish Id")
    restaurant_id: str = Field(alias="Restaurant Id")
    name: str = Field(alias="Name")
    description: str | None = Field(default=None, alias="Description")
    price: float = Field(alias="Price")
    rating: float | None = Field(default=None, alias="Rating")
    cooking_time: int | None = Field(default=None, alias="Cooking Time")
    type_of_dish: list = Field(default_factory=list, alias="Type of Dish")
    genre_of_taste: list = Field(default_factory=list, alias="Genre of Taste")
    images: list = Field(default_factory=list, alias="Images")
    available: bool = Field(default=True, alias="Available")

    model_config = ALIASED


class DishCreate(BaseModel):
    name: str | None = Field(default=None, alias="Name")
    description: str | None = Field(default=None, alias="Description")
    price: float | None = Field(default=None, ge=0, alias="Price")
    rating: float | None = Field(default=None, ge=0, le=5, alias="Rating")
    cooking_time: int | None = Field(default=None, ge=0, alias="Cooking Time")
    type_of_dish: list | str | None = Field(default=None, alias="Type of Dish")
    genre_of_taste: list | str | None = Field(default=None, alias="Genre of Taste")
    images: list | str | None = Field(default=None, alias="Images")
    available: bool | None = Field(default=None, alias="Available")

    model_config = ALIASED


class DishUpdate(DishCreate):
    pass


class ImageUploadResponse(BaseModel):
    message: str = "Image uploaded"
    fileName: str
    url: str


class ImageUrlResponse(BaseModel):
    fileName: str
    url: str
    expiresIn: int | None = None
