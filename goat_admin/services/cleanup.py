import logging

from goat_admin.config import ORPHAN_FILENAME_PATTERN
from goat_admin.schemas.response import CleanupResponse
from goat_admin.services.listings import get_referenced_image_urls, reconcile_lock
from goat_admin.services.storage import ImageFileStore

logger = logging.getLogger(__name__)


def _summary(message: str, deleted: list[str], total: int) -> CleanupResponse:
    return CleanupResponse(
        message=message,
        deleted_files=len(deleted),
        total_files=total,
        orphaned_files=deleted,
    )


def cleanup_orphan_images(store: ImageFileStore) -> CleanupResponse:
    """Remove uploaded goat images that no goat references any more."""
    with reconcile_lock:
        if not store.root.is_dir():
            return _summary("Uploads directory does not exist", [], 0)

        image_files = store.list_files(ORPHAN_FILENAME_PATTERN)
        if not image_files:
            return _summary("No image files found to clean up", [], 0)

        referenced = get_referenced_image_urls()
        orphans = [
            name for name in image_files if store.locator_for(name) not in referenced
        ]

        deleted = []
        for name in orphans:
            if store.delete(store.locator_for(name)):
                logger.info(f"Deleted orphaned file: {name}")
                deleted.append(name)
            else:
                logger.error(f"Error deleting orphaned file: {name}")

    logger.info(
        f"Orphan cleanup finished: scanned {len(image_files)}, "
        f"orphans {len(orphans)}, deleted {len(deleted)}"
    )
    return _summary(
        f"Cleanup completed. Deleted {len(deleted)} orphaned files.",
        deleted,
        len(image_files),
    )
