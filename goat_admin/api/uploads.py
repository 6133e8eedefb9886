import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from goat_admin.config import (
    IMAGE_CONTENT_TYPES,
    IMAGE_MAX_BYTES,
    VIDEO_CONTENT_TYPES,
    VIDEO_MAX_BYTES,
    VIDEO_SUBDIR,
)
from goat_admin.schemas.response import ImageUploadResponse, VideoUploadResponse
from goat_admin.services.storage import ImageFileStore, get_image_store, save_upload

logger = logging.getLogger(__name__)

router = APIRouter(tags=["uploads"])


@router.post("/upload", response_model=ImageUploadResponse)
def upload_image(
    file: UploadFile | None = File(None),
    store: ImageFileStore = Depends(get_image_store),
):
    """Store a goat image and return its `/uploads/...` URL."""
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    logger.info(f"POST /upload - {file.filename} ({file.content_type})")
    image_url, filename = save_upload(
        file,
        store,
        stem="goat-",
        allowed_content_types=IMAGE_CONTENT_TYPES,
        max_bytes=IMAGE_MAX_BYTES,
        type_error="Invalid file type. Please upload JPEG, PNG, or WebP images.",
        size_error="File too large. Please upload images smaller than 5MB.",
        sniff_image=True,
    )
    return ImageUploadResponse(
        message="File uploaded successfully", image_url=image_url, filename=filename
    )


@router.post("/upload-video-simple", response_model=VideoUploadResponse)
def upload_video(
    video: UploadFile | None = File(None),
    store: ImageFileStore = Depends(get_image_store),
):
    """Store a short video locally under `/uploads/videos/`."""
    if video is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No video file provided"
        )

    logger.info(f"POST /upload-video-simple - {video.filename} ({video.content_type})")
    video_url, file_name = save_upload(
        video,
        store,
        stem="video_",
        allowed_content_types=VIDEO_CONTENT_TYPES,
        max_bytes=VIDEO_MAX_BYTES,
        type_error="Invalid file type. Please upload MP4, WebM, OGG, MOV, or AVI files.",
        size_error="Video file too large. Maximum size is 10MB for local upload.",
        size_status=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        subdir=VIDEO_SUBDIR,
    )
    return VideoUploadResponse(
        message="Video uploaded successfully to local storage",
        video_url=video_url,
        file_name=file_name,
    )
