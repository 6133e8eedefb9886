"""
Create, update and delete goat listings while keeping uploaded image files in
step with the locators each listing references.

File deletions always run after the database change has been committed, so a
failed write never removes a file the record still points at.
"""

import logging
import threading

from sqlmodel import Session, col, select

from goat_admin.database import get_db_session
from goat_admin.errors import NotFoundError
from goat_admin.models import Goat, utcnow
from goat_admin.schemas.request import GoatInput
from goat_admin.schemas.response import GoatRead
from goat_admin.services.images import (
    clean_image_urls,
    encode_images,
    extract_image_urls,
)
from goat_admin.services.storage import ImageFileStore

logger = logging.getLogger(__name__)

# Serializes every read-diff-delete over upload files within this process
reconcile_lock = threading.Lock()


def _get_goat_or_raise(goat_id: int, session: Session) -> Goat:
    goat = session.get(Goat, goat_id)
    if goat is None:
        raise NotFoundError("Goat", goat_id)
    return goat


def _apply_input(goat: Goat, payload: GoatInput, image_urls: list[str]) -> None:
    image_url, description = encode_images(payload.description, image_urls)

    goat.name = payload.name
    goat.breed = payload.breed
    goat.age = payload.age
    goat.weight = payload.weight
    goat.price = payload.price
    goat.gender = payload.gender
    goat.color = payload.color or None
    goat.health_status = payload.health_status or "Healthy"
    goat.is_available = True if payload.is_available is None else payload.is_available
    goat.image_url = image_url
    goat.description = description


def list_goats() -> list[GoatRead]:
    with get_db_session() as session:
        goats = session.exec(
            select(Goat).order_by(col(Goat.created_at).desc(), col(Goat.id).desc())
        ).all()
        return [GoatRead.from_goat(goat) for goat in goats]


def get_goat(goat_id: int) -> GoatRead:
    with get_db_session() as session:
        return GoatRead.from_goat(_get_goat_or_raise(goat_id, session))


def create_goat(payload: GoatInput) -> GoatRead:
    image_urls = clean_image_urls(payload.image_url, payload.image_urls)

    with reconcile_lock, get_db_session() as session:
        goat = Goat(
            name=payload.name,
            breed=payload.breed,
            age=payload.age,
            weight=payload.weight,
            price=payload.price,
            gender=payload.gender,
        )
        _apply_input(goat, payload, image_urls)
        session.add(goat)
        session.commit()
        session.refresh(goat)

        logger.info(f"Created goat {goat.id} with {len(image_urls)} image(s)")
        return GoatRead.from_goat(goat)


def update_goat(goat_id: int, payload: GoatInput, store: ImageFileStore) -> GoatRead:
    """
    Replace a goat and delete the image files it no longer references.

    The removed set is `before - after`: locators the stored record pointed
    at that are missing from the submitted list.
    """
    after = clean_image_urls(payload.image_url, payload.image_urls)

    with reconcile_lock:
        with get_db_session() as session:
            goat = _get_goat_or_raise(goat_id, session)
            before = extract_image_urls(goat)

            _apply_input(goat, payload, after)
            goat.updated_at = utcnow()
            session.add(goat)
            session.commit()
            session.refresh(goat)
            result = GoatRead.from_goat(goat)

        kept = set(after)
        removed = list(dict.fromkeys(url for url in before if url not in kept))
        if removed:
            deleted_count = store.delete_many(removed)
            logger.info(
                f"Deleted {deleted_count} out of {len(removed)} removed image files "
                f"for goat ID {goat_id}"
            )

    return result


def delete_goat(goat_id: int, store: ImageFileStore) -> int:
    """Delete a goat and every image file it referenced.

    Returns the number of files actually removed from disk.
    """
    with reconcile_lock:
        with get_db_session() as session:
            goat = _get_goat_or_raise(goat_id, session)
            image_urls = extract_image_urls(goat)
            session.delete(goat)
            session.commit()

        deleted_count = 0
        if image_urls:
            deleted_count = store.delete_many(dict.fromkeys(image_urls))
            logger.info(
                f"Deleted {deleted_count} out of {len(image_urls)} image files "
                f"for goat ID {goat_id}"
            )

    return deleted_count


def get_referenced_image_urls() -> set[str]:
    """Every locator referenced by any goat."""
    referenced: set[str] = set()
    with get_db_session() as session:
        for goat in session.exec(select(Goat)).all():
            referenced.update(extract_image_urls(goat))
    return referenced
