from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Text
from sqlmodel import Column, Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Goat(SQLModel, table=True):
    __tablename__ = "goats"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    breed: str
    age: str
    weight: str
    price: float
    gender: str
    color: Optional[str] = None
    health_status: str = Field(default="Healthy")
    is_available: bool = Field(default=True)

    # Primary image locator; the remaining ones live in `description`
    image_url: Optional[str] = None
    # Plain text, or {"description": ..., "additionalImages": [...]} as JSON
    description: Optional[str] = Field(default=None, sa_column=Column(Text))

    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)


class Video(SQLModel, table=True):
    __tablename__ = "videos"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: Optional[str] = Field(default=None, sa_column=Column(Text))
    video_url: str
    thumbnail_url: Optional[str] = None
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)


class ContactMessage(SQLModel, table=True):
    __tablename__ = "contact_messages"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str
    subject: Optional[str] = None
    message: str = Field(sa_column=Column(Text, nullable=False))

    created_at: datetime = Field(default_factory=utcnow, index=True)
