from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from goat_admin.models import Goat
from goat_admin.services.images import decode_description, extract_image_urls


class CamelResponse(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class GoatRead(CamelResponse):
    id: int
    name: str
    breed: str
    age: str
    weight: str
    price: float
    gender: str
    color: str | None
    health_status: str
    is_available: bool
    description: str | None
    # `description` with any stored image structure stripped
    description_text: str | None
    image_url: str | None
    image_urls: list[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_goat(cls, goat: Goat) -> "GoatRead":
        return cls(
            id=goat.id,
            name=goat.name,
            breed=goat.breed,
            age=goat.age,
            weight=goat.weight,
            price=goat.price,
            gender=goat.gender,
            color=goat.color,
            health_status=goat.health_status,
            is_available=goat.is_available,
            description=goat.description,
            description_text=decode_description(goat.description)[0],
            image_url=goat.image_url,
            image_urls=extract_image_urls(goat),
            created_at=goat.created_at,
            updated_at=goat.updated_at,
        )


class GoatDeleteResponse(CamelResponse):
    message: str
    deleted_files: int


class VideoRead(CamelResponse):
    id: int
    title: str
    description: str | None
    video_url: str
    thumbnail_url: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ContactMessageRead(CamelResponse):
    id: int
    name: str
    email: str
    subject: str | None
    message: str
    created_at: datetime


class MessageResponse(BaseModel):
    message: str


class ImageUploadResponse(CamelResponse):
    message: str
    image_url: str
    filename: str


class VideoUploadResponse(CamelResponse):
    message: str
    video_url: str
    file_name: str


class CleanupResponse(CamelResponse):
    message: str
    deleted_files: int
    total_files: int
    orphaned_files: list[str]
