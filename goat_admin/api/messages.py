import logging

from fastapi import APIRouter
from sqlmodel import col, select

from goat_admin.database import get_db_session
from goat_admin.errors import NotFoundError
from goat_admin.models import ContactMessage
from goat_admin.schemas.response import ContactMessageRead, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("", response_model=list[ContactMessageRead])
def get_messages():
    """Contact messages submitted through the public site, newest first."""
    with get_db_session() as session:
        messages = session.exec(
            select(ContactMessage).order_by(
                col(ContactMessage.created_at).desc(), col(ContactMessage.id).desc()
            )
        ).all()
        return [ContactMessageRead.model_validate(message) for message in messages]


@router.get("/{message_id}", response_model=ContactMessageRead)
def get_message(message_id: int):
    with get_db_session() as session:
        message = session.get(ContactMessage, message_id)
        if message is None:
            raise NotFoundError("Message", message_id)
        return ContactMessageRead.model_validate(message)


@router.delete("/{message_id}", response_model=MessageResponse)
def delete_message(message_id: int):
    logger.info(f"DELETE /messages/{message_id}")

    with get_db_session() as session:
        message = session.get(ContactMessage, message_id)
        if message is None:
            raise NotFoundError("Message", message_id)
        session.delete(message)

    return MessageResponse(message="Message deleted successfully")
