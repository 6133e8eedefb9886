from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class GoatInput(CamelModel):
    name: str = Field(min_length=1)
    breed: str = Field(min_length=1)
    age: str = Field(min_length=1)
    weight: str = Field(min_length=1)
    price: float = Field(gt=0)
    gender: str = Field(min_length=1)
    description: str | None = None
    image_url: str | None = None
    image_urls: list[str | None] | None = None
    is_available: bool | None = None
    color: str | None = None
    health_status: str | None = None

    @field_validator("age", "weight", mode="before")
    @classmethod
    def stringify_number(cls, value):
        # The dashboard form sometimes submits these as bare numbers
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class VideoInput(CamelModel):
    title: str = Field(min_length=1)
    video_url: str = Field(min_length=1)
    description: str | None = None
    thumbnail_url: str | None = None
    is_active: bool | None = None
