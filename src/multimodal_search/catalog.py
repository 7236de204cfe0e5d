from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field


class Catalog(BaseModel):
    """
    The fixed set of items embedded into a fresh store.
    Image paths are relative to the assets directory.
    """

    images: List[str] = Field(default_factory=list)
    texts: List[str] = Field(default_factory=list)


class CatalogEntry(BaseModel):
    id: int
    kind: Literal["image", "text"]
    value: str


DEFAULT_CATALOG = Catalog(
    images=[
        "images/dog.jpeg",
        "images/cat.jpg",
        "images/parrot.jpg",
        "images/iphone.jpeg",
        "images/steve.jpeg",
        "images/airpod.jpeg",
    ],
    texts=[
        "Dogs are domesticated mammals.",
        "Apple Inc. is an American multinational technology company.",
        "Steve Jobs was the chairman, chief executive officer, and co-founder of Apple Inc.",
    ],
)

DEFAULT_QUERY = "Mammals"
DEFAULT_TOP_K = 1
