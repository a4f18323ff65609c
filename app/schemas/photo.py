# app/schemas/photo.py
import uuid
from datetime import datetime

from sqlmodel import SQLModel


class PhotoRead(SQLModel):
    """
    Read model for business photos.
    """

    id: uuid.UUID
    business_id: uuid.UUID
    photo_url: str
    storage_path: str
    is_primary: bool
    created_at: datetime


class PhotoResponse(SQLModel):
    success: bool = True
    message: str
    photo: PhotoRead


class PhotoListResponse(SQLModel):
    success: bool = True
    photos: list[PhotoRead]
