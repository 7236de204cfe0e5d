"""
Tests for the Chroma-backed vector store, run against a real persistent client in tmp_path.
"""

from pathlib import Path

import pytest

from multimodal_search.models import MediaType, VectorDocument
from multimodal_search.vectorstore_chroma import ChromaVectorStore


@pytest.fixture
def store(store_dir: Path) -> ChromaVectorStore:
    """Provide an empty store."""
    return ChromaVectorStore(store_dir)


class TestChromaVectorStore:
    """Test suite for ChromaVectorStore."""

    def test_creating_store_should_create_directory(self, store_dir: Path) -> None:
        assert not ChromaVectorStore.exists(store_dir)

        ChromaVectorStore(store_dir)

        assert ChromaVectorStore.exists(store_dir)

    def test_search_on_empty_store_should_return_nothing(self, store: ChromaVectorStore) -> None:
        assert store.similarity_search_by_vector_with_score([1.0, 0.0, 0.0], k=3) == []

    def test_mismatched_lengths_should_raise(self, store: ChromaVectorStore) -> None:
        doc = VectorDocument.from_text("hello", doc_id=0)

        with pytest.raises(ValueError):
            store.add_documents([doc], [[1.0, 0.0], [0.0, 1.0]])

    def test_k_below_one_should_raise(self, store: ChromaVectorStore) -> None:
        with pytest.raises(ValueError):
            store.similarity_search_by_vector_with_score([1.0, 0.0], k=0)

    def test_search_should_order_closest_first(self, store: ChromaVectorStore) -> None:
        # Arrange
        near = VectorDocument.from_text("near", doc_id=0)
        far = VectorDocument.from_text("far", doc_id=1)
        store.add_documents([far, near], [[0.0, 1.0, 0.1], [1.0, 0.0, 0.1]])

        # Act
        results = store.similarity_search_by_vector_with_score([1.0, 0.0, 0.1], k=2)

        # Assert
        assert [doc.content for doc, _ in results] == ["near", "far"]
        assert results[0][1] <= results[1][1]

    def test_k_larger_than_store_should_return_everything(self, store: ChromaVectorStore) -> None:
        docs = [VectorDocument.from_text(f"t{i}", doc_id=i) for i in range(3)]
        store.add_documents(docs, [[1.0, float(i), 0.1] for i in range(3)])

        results = store.similarity_search_by_vector_with_score([1.0, 0.0, 0.1], k=10)

        assert len(results) == 3

    def test_documents_should_survive_reopen(self, store_dir: Path) -> None:
        """Test writes are persisted without an explicit save."""
        # Arrange
        first = ChromaVectorStore(store_dir)
        first.add_documents(
            [
                VectorDocument.from_text("text doc", doc_id=1),
                VectorDocument.from_image(b"\x00\x01", doc_id=0, path="images/a.png"),
            ],
            [[0.0, 1.0, 0.1], [1.0, 0.0, 0.1]],
        )

        # Act
        reopened = ChromaVectorStore(store_dir)
        docs = reopened.documents()

        # Assert
        assert [d.metadata.id for d in docs] == [0, 1]
        assert docs[0].metadata.media_type is MediaType.IMAGE
        assert docs[0].image_bytes() == b"\x00\x01"
        assert docs[1].metadata.path is None
