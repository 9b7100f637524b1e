"""File storage data models."""

from enum import Enum

from pydantic import BaseModel, Field


class Purpose(str, Enum):
    """Declared purpose of an uploaded file."""

    GENERAL = "general"


class File(BaseModel):
    """Stored file metadata."""

    id: str
    object: str = "file"
    bytes: int = 0
    created_at: int = 0
    filename: str = ""
    purpose: str = Purpose.GENERAL.value


class FilesResponse(BaseModel):
    """GET /files body."""

    data: list[File] = Field(default_factory=list)
