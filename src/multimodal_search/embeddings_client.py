from __future__ import annotations

import logging
from typing import List, Optional

import vertexai
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential
from vertexai.vision_models import Image, MultiModalEmbeddingModel

from multimodal_search.config import settings

log = logging.getLogger("multimodal_search.embeddings")


class EmbeddingsClient:
    """
    Thin wrapper around the Vertex AI multimodal embedding model.
    Text and image vectors live in the same space, so either can query the other.
    """

    def __init__(
        self,
        model_name: Optional[str] = None,
        *,
        project: Optional[str] = None,
        location: Optional[str] = None,
        dimension: Optional[int] = None,
        max_attempts: Optional[int] = None,
    ) -> None:
        vertexai.init(
            project=project or settings.google_cloud_project,
            location=location or settings.google_cloud_location,
        )
        self._model = MultiModalEmbeddingModel.from_pretrained(model_name or settings.embedding_model)
        self._dimension = dimension or settings.embedding_dimension
        self._max_attempts = max_attempts or settings.embed_max_attempts

    def _retrying(self) -> Retrying:
        return Retrying(
            retry=retry_if_exception_type(Exception),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            stop=stop_after_attempt(self._max_attempts),
            reraise=True,
        )

    def embed_text(self, text: str) -> List[float]:
        """
        Generate a single embedding vector for the given text.
        """
        if not text or not text.strip():
            raise ValueError("Cannot embed empty text")

        log.debug("Embedding text (%d chars)", len(text))

        for attempt in self._retrying():
            with attempt:
                resp = self._model.get_embeddings(contextual_text=text, dimension=self._dimension)

        if not resp.text_embedding:
            raise RuntimeError("Invalid embedding response")
        return list(resp.text_embedding)

    def embed_image(self, image_bytes: bytes) -> List[float]:
        """
        Generate a single embedding vector for raw image bytes (JPEG/PNG/...).
        """
        if not image_bytes:
            raise ValueError("Cannot embed empty image")

        log.debug("Embedding image (%d bytes)", len(image_bytes))

        for attempt in self._retrying():
            with attempt:
                resp = self._model.get_embeddings(
                    image=Image(image_bytes=image_bytes),
                    dimension=self._dimension,
                )

        if not resp.image_embedding:
            raise RuntimeError("Invalid embedding response")
        return list(resp.image_embedding)
