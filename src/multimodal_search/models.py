from __future__ import annotations

import base64
import json
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MediaType(str, Enum):
    TEXT = "text"
    IMAGE = "image"


def _has_file_name(path: Optional[str]) -> bool:
    if not path or path.endswith("/"):
        return False
    return PurePosixPath(path).name not in ("", ".", "..")


class DocumentMetadata(BaseModel):
    """
    Metadata stored alongside every vector.
    Only image documents carry a path; it is kept exactly as listed in the catalog.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int = Field(..., ge=0, description="Sequential ID assigned at ingestion")
    media_type: MediaType = Field(..., alias="mediaType")
    path: Optional[str] = None

    @model_validator(mode="after")
    def path_only_for_images(self) -> "DocumentMetadata":
        if self.media_type is MediaType.IMAGE and not _has_file_name(self.path):
            raise ValueError("image documents require a path ending in a file name")
        if self.media_type is MediaType.TEXT and self.path is not None:
            raise ValueError("text documents must not carry a path")
        return self

    def to_store(self) -> Dict[str, Any]:
        """
        Chroma metadata must be scalar values only, and None is rejected,
        so absent fields are dropped.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return json.dumps(self.to_store(), separators=(",", ":"))


class VectorDocument(BaseModel):
    """
    Single document stored in the vector database.
    Image content is the base64 encoding of the original file bytes.
    """

    model_config = ConfigDict(frozen=True)

    content: str
    metadata: DocumentMetadata

    @classmethod
    def from_image(cls, image_bytes: bytes, doc_id: int, path: str) -> "VectorDocument":
        return cls(
            content=base64.b64encode(image_bytes).decode("ascii"),
            metadata=DocumentMetadata(id=doc_id, media_type=MediaType.IMAGE, path=path),
        )

    @classmethod
    def from_text(cls, text: str, doc_id: int) -> "VectorDocument":
        return cls(
            content=text,
            metadata=DocumentMetadata(id=doc_id, media_type=MediaType.TEXT),
        )

    def image_bytes(self) -> bytes:
        if self.metadata.media_type is not MediaType.IMAGE:
            raise ValueError(f"Document {self.metadata.id} is not an image")
        return base64.b64decode(self.content)


class SearchHit(BaseModel):
    rank: int = Field(..., ge=1)
    score: float = Field(..., description="Cosine distance, lower is closer")
    document: VectorDocument
