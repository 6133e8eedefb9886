import logging

from fastapi import APIRouter, Depends

from goat_admin.schemas.response import CleanupResponse
from goat_admin.services.cleanup import cleanup_orphan_images
from goat_admin.services.storage import ImageFileStore, get_image_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["cleanup"])


@router.post("/cleanup-files", response_model=CleanupResponse)
def cleanup_files(store: ImageFileStore = Depends(get_image_store)):
    """Clean up orphaned image files that are not referenced in the database."""
    logger.info("POST /cleanup-files")
    return cleanup_orphan_images(store)
