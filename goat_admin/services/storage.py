import logging
import re
import time
from io import BytesIO
from pathlib import Path

from fastapi import HTTPException, UploadFile, status
from PIL import Image, UnidentifiedImageError

from goat_admin.config import UPLOAD_URL_PREFIX, get_upload_dir

logger = logging.getLogger(__name__)

CONTENT_TYPE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "video/mp4": "mp4",
    "video/webm": "webm",
    "video/ogg": "ogg",
    "video/mov": "mov",
    "video/quicktime": "mov",
    "video/avi": "avi",
}


class ImageFileStore:
    """Files under the local upload directory, addressed by `/uploads/...` locators."""

    def __init__(self, root: str | Path, prefix: str = UPLOAD_URL_PREFIX):
        self.root = Path(root)
        self.prefix = prefix

    def resolve(self, locator: str) -> Path | None:
        """Map a locator to a path inside the upload directory, or None."""
        if not locator or not locator.startswith(self.prefix):
            return None

        relative = locator[len(self.prefix):].split("?")[0]
        if not relative:
            return None

        base = self.root.resolve()
        path = (base / relative).resolve()
        try:
            path.relative_to(base)
        except ValueError:
            return None
        return path

    def locator_for(self, relative_path: str) -> str:
        return f"{self.prefix}{relative_path}"

    def exists(self, locator: str) -> bool:
        path = self.resolve(locator)
        return path is not None and path.is_file()

    def delete(self, locator: str) -> bool:
        """Remove the file behind `locator`. True only if a file was removed."""
        path = self.resolve(locator)
        if path is None:
            logger.warning(f"Invalid image URL for deletion: {locator}")
            return False

        if not path.is_file():
            logger.info(f"File does not exist: {path}")
            return False

        try:
            path.unlink()
        except OSError as e:
            logger.error(f"Error deleting file {locator}: {e}")
            return False

        logger.info(f"Successfully deleted file: {path}")
        return True

    def delete_many(self, locators) -> int:
        deleted_count = 0
        for locator in locators:
            if self.delete(locator):
                deleted_count += 1
        return deleted_count

    def list_files(self, pattern: str) -> list[str]:
        """Names of files directly in the upload directory matching `pattern`."""
        if not self.root.is_dir():
            return []

        matcher = re.compile(pattern, re.IGNORECASE)
        return sorted(
            entry.name
            for entry in self.root.iterdir()
            if entry.is_file() and matcher.match(entry.name)
        )

    def save(self, content: bytes, relative_path: str) -> str:
        """Write a new file; raises FileExistsError rather than overwrite one."""
        destination = self.root / relative_path
        destination.parent.mkdir(parents=True, exist_ok=True)
        with open(destination, "xb") as f:
            f.write(content)
        return self.locator_for(Path(relative_path).as_posix())


def get_image_store() -> ImageFileStore:
    return ImageFileStore(get_upload_dir())


def _detect_image_mime(content: bytes) -> str | None:
    try:
        with Image.open(BytesIO(content)) as img:
            image_format = img.format
            img.verify()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError):
        return None

    if not image_format:
        return None

    normalized = image_format.upper()
    if normalized == "JPEG":
        return "image/jpeg"
    if normalized == "PNG":
        return "image/png"
    if normalized == "WEBP":
        return "image/webp"
    return None


def save_upload(
    file: UploadFile,
    store: ImageFileStore,
    stem: str,
    allowed_content_types: tuple[str, ...],
    max_bytes: int,
    type_error: str,
    size_error: str,
    size_status: int = status.HTTP_400_BAD_REQUEST,
    subdir: str = "",
    sniff_image: bool = False,
) -> tuple[str, str]:
    """
    Validate and write an uploaded file, returning `(locator, filename)`.

    The stored extension always comes from the media type, never from the
    client's filename. With `sniff_image` the media type is read from the
    bytes themselves and the declared one only has to be allowed.

    Raises HTTPException on a disallowed media type or an oversized file.
    """
    content_type = file.content_type
    if not content_type or content_type not in allowed_content_types:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=type_error)

    content = file.file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise HTTPException(status_code=size_status, detail=size_error)

    if sniff_image:
        content_type = _detect_image_mime(content)
        if not content_type or content_type not in allowed_content_types:
            logger.warning(
                f"Rejected upload {file.filename!r}: declared {file.content_type}, "
                f"content does not match"
            )
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=type_error)

    extension = CONTENT_TYPE_EXTENSIONS[content_type]
    timestamp = int(time.time() * 1000)
    while True:
        name = f"{stem}{timestamp}.{extension}"
        relative = f"{subdir}/{name}" if subdir else name
        try:
            locator = store.save(content, relative)
            break
        except FileExistsError:
            timestamp += 1
        except OSError as e:
            logger.error(f"Error writing upload {relative}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to upload file",
            )

    logger.info(f"Saved upload {locator} ({len(content)} bytes)")
    return locator, name
