from datetime import datetime

from pydantic import BaseModel, Field


class ExerciseBase(BaseModel):
    name: str = Field(..., max_length=255)
    description: str
    image_url: str = Field(..., max_length=1024)
    group: str = Field(..., max_length=128, description="Muscle group, e.g. legs/chest/back")
    video_url: str | None = Field(None, max_length=1024)


class ExerciseCreate(ExerciseBase):
    class Config:
        extra = "forbid"


class ExerciseUpdate(BaseModel):
    name: str | None = Field(None, max_length=255)
    description: str | None = None
    image_url: str | None = Field(None, max_length=1024)
    group: str | None = Field(None, max_length=128)
    video_url: str | None = Field(None, max_length=1024)


class ExerciseResponse(ExerciseBase):
    id: int
    created_at: datetime

    class Config:
        from_attributes = True
