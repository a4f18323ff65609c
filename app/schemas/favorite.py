# app/schemas/favorite.py
import uuid
from datetime import datetime

from pydantic import ConfigDict
from sqlmodel import SQLModel

from app.schemas.business import BusinessRead


class FavoriteCreate(SQLModel):
    model_config = ConfigDict(extra="ignore")

    user_id: uuid.UUID
    business_id: uuid.UUID


class FavoriteRead(SQLModel):
    id: uuid.UUID
    user_id: uuid.UUID
    business_id: uuid.UUID
    created_at: datetime


class FavoriteBusinessRead(BusinessRead):
    """
    A favorited business with its current attributes.
    """

    favorite_id: uuid.UUID
    favorited_at: datetime
    cover_photo: str | None = None


class FavoriteResponse(SQLModel):
    success: bool = True
    message: str
    favorite: FavoriteRead


class FavoriteListResponse(SQLModel):
    success: bool = True
    favorites: list[FavoriteBusinessRead]
    count: int


class FavoriteDeleteResponse(SQLModel):
    success: bool = True
    deleted: bool
