import logging

from fastapi import APIRouter, status
from sqlmodel import Session, col, select

from goat_admin.database import get_db_session
from goat_admin.errors import NotFoundError
from goat_admin.models import Video, utcnow
from goat_admin.schemas.request import VideoInput
from goat_admin.schemas.response import MessageResponse, VideoRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/videos", tags=["videos"])


@router.get("", response_model=list[VideoRead])
def get_videos():
    """Fetch all videos, newest first."""
    with get_db_session() as session:
        videos = session.exec(
            select(Video).order_by(col(Video.created_at).desc(), col(Video.id).desc())
        ).all()
        return [VideoRead.model_validate(video) for video in videos]


@router.post("", response_model=VideoRead, status_code=status.HTTP_201_CREATED)
def create_video(video_data: VideoInput):
    logger.info(f"POST /videos - Creating video {video_data.title!r}")

    with get_db_session() as session:
        video = Video(title=video_data.title, video_url=video_data.video_url)
        _apply_input(video, video_data)
        session.add(video)
        session.commit()
        session.refresh(video)
        return VideoRead.model_validate(video)


@router.get("/{video_id}", response_model=VideoRead)
def get_video(video_id: int):
    with get_db_session() as session:
        return VideoRead.model_validate(_get_video_or_raise(video_id, session))


@router.put("/{video_id}", response_model=VideoRead)
def update_video(video_id: int, video_data: VideoInput):
    logger.info(f"PUT /videos/{video_id}")

    with get_db_session() as session:
        video = _get_video_or_raise(video_id, session)
        _apply_input(video, video_data)
        video.updated_at = utcnow()
        session.add(video)
        session.commit()
        session.refresh(video)
        return VideoRead.model_validate(video)


@router.delete("/{video_id}", response_model=MessageResponse)
def delete_video(video_id: int):
    logger.info(f"DELETE /videos/{video_id}")

    with get_db_session() as session:
        video = _get_video_or_raise(video_id, session)
        session.delete(video)

    return MessageResponse(message="Video deleted successfully")


def _get_video_or_raise(video_id: int, session: Session) -> Video:
    video = session.get(Video, video_id)
    if video is None:
        raise NotFoundError("Video", video_id)
    return video


def _apply_input(video: Video, video_data: VideoInput):
    video.title = video_data.title
    video.description = video_data.description or None
    video.video_url = video_data.video_url
    video.thumbnail_url = video_data.thumbnail_url or None
    video.is_active = True if video_data.is_active is None else video_data.is_active
