# app/routers/photos.py
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlmodel import Session

from app.core.storage_utils import PhotoStorage, get_storage
from app.database import get_session
from app.repositories.business_repo import BusinessRepository
from app.repositories.photo_repo import PhotoRepository
from app.schemas.business import MessageResponse
from app.schemas.photo import PhotoRead, PhotoResponse
from app.services.photo_service import PhotoService

router = APIRouter(prefix="/upload", tags=["Photos"])

service = PhotoService(PhotoRepository(), BusinessRepository())


@router.post(
    "",
    response_model=PhotoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a photo for a business",
)
def upload_photo(
    file: UploadFile | None = File(None),
    business_id: str | None = Form(None),
    is_primary: str | None = Form(None),
    session: Session = Depends(get_session),
    storage: PhotoStorage = Depends(get_storage),
):
    """
    Multipart upload.

    - file: the image
    - business_id: UUID of the listing
    - is_primary: "true" to make this the cover photo (others are demoted)
    """
    if file is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file provided",
        )

    photo = service.upload_photo(
        session=session,
        storage=storage,
        business_id_raw=business_id,
        is_primary=(is_primary or "").strip().lower() == "true",
        filename=file.filename,
        content_type=file.content_type,
        file_bytes=file.file.read(),
    )
    return PhotoResponse(
        message="Photo uploaded successfully",
        photo=PhotoRead.model_validate(photo),
    )


@router.delete("", response_model=MessageResponse, summary="Delete a photo by id")
def delete_photo(
    photo_id: str | None = None,
    session: Session = Depends(get_session),
    storage: PhotoStorage = Depends(get_storage),
):
    """
    Delete the stored file, then the photo row.
    """
    service.delete_photo(session, storage, photo_id)
    return MessageResponse(message="Photo deleted successfully")
