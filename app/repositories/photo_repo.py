# app/repositories/photo_repo.py
import uuid

from sqlalchemy import update
from sqlmodel import Session, select

from app.models.business import BusinessPhoto


class PhotoRepository:
    """
    Data access layer for BusinessPhoto.
    """

    def list_for_business(
        self,
        session: Session,
        business_id: uuid.UUID,
    ) -> list[BusinessPhoto]:
        stmt = (
            select(BusinessPhoto)
            .where(BusinessPhoto.business_id == business_id)
            .order_by(BusinessPhoto.is_primary.desc(), BusinessPhoto.created_at.asc())
        )
        return list(session.exec(stmt).all())

    def get_by_id(self, session: Session, photo_id: uuid.UUID) -> BusinessPhoto | None:
        return session.get(BusinessPhoto, photo_id)

    def create(self, session: Session, photo: BusinessPhoto) -> BusinessPhoto:
        """
        Insert a photo. If it is primary, every other photo of the same
        business is demoted by one conditional UPDATE in the same transaction,
        so the business ends up with exactly one primary.
        """
        session.add(photo)
        session.flush()  # Assign PK

        if photo.is_primary:
            session.execute(
                update(BusinessPhoto)
                .where(BusinessPhoto.business_id == photo.business_id)
                .values(is_primary=(BusinessPhoto.id == photo.id))
                .execution_options(synchronize_session=False)
            )

        session.commit()
        session.refresh(photo)
        return photo

    def delete(self, session: Session, photo: BusinessPhoto) -> None:
        session.delete(photo)
        session.commit()
