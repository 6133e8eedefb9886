import logging
import os
from pathlib import Path

UPLOAD_URL_PREFIX = "/uploads/"
VIDEO_SUBDIR = "videos"

IMAGE_CONTENT_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")
IMAGE_MAX_BYTES = 5 * 1024 * 1024

VIDEO_CONTENT_TYPES = (
    "video/mp4",
    "video/webm",
    "video/ogg",
    "video/mov",
    "video/quicktime",
    "video/avi",
)
VIDEO_MAX_BYTES = 10 * 1024 * 1024

# Only uploaded listing images are candidates for the orphan sweep
ORPHAN_FILENAME_PATTERN = r"^goat-.*\.(jpg|jpeg|png|webp)$"


def get_upload_dir() -> Path:
    return Path(os.environ.get("UPLOAD_DIR", os.path.join("public", "uploads")))


def configure_logging():
    level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
