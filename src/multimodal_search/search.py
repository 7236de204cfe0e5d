from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

import typer

from multimodal_search.embeddings_client import EmbeddingsClient
from multimodal_search.models import SearchHit
from multimodal_search.render import render_hits
from multimodal_search.vectorstore_chroma import ChromaVectorStore

log = logging.getLogger("multimodal_search.search")


def clear_directory(directory: Path) -> int:
    """
    Delete every file directly inside directory. The directory must exist.
    """
    removed = 0
    for entry in Path(directory).iterdir():
        if entry.is_dir():
            continue
        entry.unlink()
        removed += 1

    log.debug("Cleared %d files from %s", removed, directory)
    return removed


def vector_search(
    store: ChromaVectorStore,
    query_vec: Sequence[float],
    top_k: int,
) -> List[SearchHit]:
    pairs = store.similarity_search_by_vector_with_score(query_vec, k=top_k)
    hits = [
        SearchHit(rank=i, score=score, document=doc)
        for i, (doc, score) in enumerate(pairs, start=1)
    ]
    log.info("Search returned %d results", len(hits))
    return hits


def text_similarity_search(
    store: ChromaVectorStore,
    embedder: EmbeddingsClient,
    text: str,
    top_k: int,
    output_dir: Path,
) -> List[SearchHit]:
    """
    Find the top_k documents (text or image) closest to a text query.
    """
    if not text or not text.strip():
        raise ValueError("Query must not be empty")
    if top_k < 1:
        raise ValueError("top_k must be >= 1")

    clear_directory(output_dir)
    log.info("Performing text similarity search.")

    query_vec = embedder.embed_text(text)
    hits = vector_search(store, query_vec, top_k)

    typer.echo(f"Similarity search results for text query: {text}")
    render_hits(hits, output_dir)
    return hits


def image_similarity_search(
    store: ChromaVectorStore,
    embedder: EmbeddingsClient,
    image_path: Path,
    top_k: int,
    output_dir: Path,
) -> List[SearchHit]:
    """
    Find the top_k documents (text or image) closest to an image file.
    """
    if top_k < 1:
        raise ValueError("top_k must be >= 1")

    clear_directory(output_dir)
    log.info("Performing image similarity search.")

    query_vec = embedder.embed_image(Path(image_path).read_bytes())
    hits = vector_search(store, query_vec, top_k)

    typer.echo(f"Similarity search results for image query: {image_path}")
    render_hits(hits, output_dir)
    return hits
