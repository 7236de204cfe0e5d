from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Tuple

import chromadb
from chromadb.config import Settings as ChromaSettings

from multimodal_search.models import DocumentMetadata, VectorDocument

log = logging.getLogger("multimodal_search.vectorstore")

DEFAULT_COLLECTION = "multimodal"


class ChromaVectorStore:
    """
    Persistent Chroma collection holding (vector, document) pairs.

    Writes go straight to disk, so there is no separate save step:
    whatever add_documents accepted is there on the next open.
    """

    def __init__(self, persist_dir: Path, collection_name: str = DEFAULT_COLLECTION) -> None:
        self.persist_dir = Path(persist_dir)
        self._client = chromadb.PersistentClient(
            path=str(self.persist_dir),
            settings=ChromaSettings(anonymized_telemetry=False),
        )
        self._collection = self._client.get_or_create_collection(
            name=collection_name,
            metadata={"hnsw:space": "cosine"},
        )

    @staticmethod
    def exists(persist_dir: Path) -> bool:
        return Path(persist_dir).exists()

    def count(self) -> int:
        return self._collection.count()

    def close(self) -> None:
        """
        Drop Chroma's per-path client cache so the directory can be removed and rebuilt.
        """
        self._client.clear_system_cache()

    def add_documents(self, docs: Sequence[VectorDocument], vectors: Sequence[Sequence[float]]) -> None:
        """
        Add documents with their vectors; both sequences are aligned by position.
        """
        if len(docs) != len(vectors):
            raise ValueError(f"Got {len(docs)} documents but {len(vectors)} vectors")
        if not docs:
            return

        self._collection.add(
            ids=[str(d.metadata.id) for d in docs],
            embeddings=[list(v) for v in vectors],
            documents=[d.content for d in docs],
            metadatas=[d.metadata.to_store() for d in docs],
        )

    def similarity_search_by_vector_with_score(
        self,
        vector: Sequence[float],
        k: int = 4,
    ) -> List[Tuple[VectorDocument, float]]:
        """
        Return up to k (document, distance) pairs, closest first.
        """
        if k < 1:
            raise ValueError("k must be >= 1")

        total = self.count()
        if total == 0:
            return []

        results = self._collection.query(
            query_embeddings=[list(vector)],
            n_results=min(k, total),
            include=["metadatas", "documents", "distances"],
        )

        pairs: List[Tuple[VectorDocument, float]] = []
        for content, meta, distance in zip(
            results["documents"][0],
            results["metadatas"][0],
            results["distances"][0],
        ):
            doc = VectorDocument(content=content, metadata=DocumentMetadata.model_validate(meta))
            pairs.append((doc, float(distance)))
        return pairs

    def documents(self) -> List[VectorDocument]:
        """
        All stored documents ordered by their ingestion ID.
        """
        got = self._collection.get(include=["metadatas", "documents"])
        docs = [
            VectorDocument(content=content, metadata=DocumentMetadata.model_validate(meta))
            for content, meta in zip(got["documents"], got["metadatas"])
        ]
        docs.sort(key=lambda d: d.metadata.id)
        return docs
