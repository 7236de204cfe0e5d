from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

import typer

from multimodal_search import __version__
from multimodal_search.catalog import DEFAULT_CATALOG, DEFAULT_QUERY, DEFAULT_TOP_K
from multimodal_search.config import settings
from multimodal_search.embeddings_client import EmbeddingsClient
from multimodal_search.index import open_or_build_store
from multimodal_search.logging_utils import setup_logging
from multimodal_search.search import image_similarity_search, text_similarity_search
from multimodal_search.vectorstore_chroma import ChromaVectorStore


app = typer.Typer(add_completion=False, help="Multimodal (image + text) embedding search CLI")


def _open_store() -> Tuple[ChromaVectorStore, EmbeddingsClient, dict]:
    embedder = EmbeddingsClient()
    store, summary = open_or_build_store(
        settings.vector_store_dir,
        embedder,
        DEFAULT_CATALOG,
        settings.assets_dir,
        collection_name=settings.collection_name,
    )
    return store, embedder, summary


@app.command()
def health() -> None:
    """Health check to verify config + logging works."""
    setup_logging(settings.log_level)
    log = logging.getLogger("multimodal_search.health")

    log.info("Health check OK.")
    log.info("Project: %s", settings.google_cloud_project or "<ADC default>")
    log.info("Location: %s", settings.google_cloud_location)
    log.info("Embedding model: %s (dim=%d)", settings.embedding_model, settings.embedding_dimension)
    log.info("Vector store dir: %s", settings.vector_store_dir)
    log.info("Assets dir: %s", settings.assets_dir)
    log.info("Output dir: %s", settings.output_dir)

    typer.echo("OK")


@app.command()
def version() -> None:
    """Print version and exit."""
    typer.echo(f"multimodal-search {__version__}")


@app.command()
def ingest() -> None:
    """
    Build the vector store from the built-in catalog, unless it already exists.
    """
    setup_logging(settings.log_level)

    _, _, summary = _open_store()
    typer.echo(summary)


@app.command("search-text")
def search_text(
    query: str = typer.Argument(..., help="Text query"),
    top_k: int = typer.Option(DEFAULT_TOP_K, "--top-k", min=1, help="Number of results to return"),
) -> None:
    """
    Similarity search with a text query; matched images are written to the output dir.
    """
    setup_logging(settings.log_level)

    store, embedder, _ = _open_store()
    hits = text_similarity_search(store, embedder, query, top_k, settings.output_dir)

    if not hits:
        typer.echo("No results found.")


@app.command("search-image")
def search_image(
    image: Path = typer.Argument(..., exists=True, dir_okay=False, help="Query image file"),
    top_k: int = typer.Option(DEFAULT_TOP_K, "--top-k", min=1, help="Number of results to return"),
) -> None:
    """
    Similarity search with an image query; matched images are written to the output dir.
    """
    setup_logging(settings.log_level)

    store, embedder, _ = _open_store()
    hits = image_similarity_search(store, embedder, image, top_k, settings.output_dir)

    if not hits:
        typer.echo("No results found.")


@app.command()
def documents() -> None:
    """
    List the metadata of every stored document, in ID order.
    """
    setup_logging(settings.log_level)

    if not ChromaVectorStore.exists(settings.vector_store_dir):
        typer.secho(f"No vector store at {settings.vector_store_dir}", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)

    store = ChromaVectorStore(settings.vector_store_dir, collection_name=settings.collection_name)
    for doc in store.documents():
        typer.echo(doc.metadata.to_json())


@app.command()
def run() -> None:
    """
    Ingest-or-skip, then search for "Mammals" (top 1).
    """
    setup_logging(settings.log_level)

    store, embedder, _ = _open_store()
    text_similarity_search(store, embedder, DEFAULT_QUERY, DEFAULT_TOP_K, settings.output_dir)


if __name__ == "__main__":
    app()
