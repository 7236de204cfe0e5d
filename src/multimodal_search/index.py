from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List, Tuple

from multimodal_search.catalog import Catalog, CatalogEntry
from multimodal_search.embeddings_client import EmbeddingsClient
from multimodal_search.models import VectorDocument
from multimodal_search.vectorstore_chroma import DEFAULT_COLLECTION, ChromaVectorStore

log = logging.getLogger("multimodal_search.index")


def assign_ids(catalog: Catalog) -> List[CatalogEntry]:
    """
    Number catalog items with one counter: images first, then texts.
    """
    entries: List[CatalogEntry] = []
    next_id = 0

    for path in catalog.images:
        entries.append(CatalogEntry(id=next_id, kind="image", value=path))
        next_id += 1

    for text in catalog.texts:
        entries.append(CatalogEntry(id=next_id, kind="text", value=text))
        next_id += 1

    return entries


def add_image(
    store: ChromaVectorStore,
    embedder: EmbeddingsClient,
    path: str,
    doc_id: int,
    assets_dir: Path,
) -> VectorDocument:
    image_bytes = (Path(assets_dir) / path).read_bytes()
    vec = embedder.embed_image(image_bytes)
    doc = VectorDocument.from_image(image_bytes, doc_id=doc_id, path=path)
    store.add_documents([doc], [vec])
    log.info("Image %s added.", path)
    return doc


def add_text(
    store: ChromaVectorStore,
    embedder: EmbeddingsClient,
    text: str,
    doc_id: int,
) -> VectorDocument:
    vec = embedder.embed_text(text)
    doc = VectorDocument.from_text(text, doc_id=doc_id)
    store.add_documents([doc], [vec])
    log.info('Text "%s" added.', text)
    return doc


def ingest_catalog(
    store: ChromaVectorStore,
    embedder: EmbeddingsClient,
    catalog: Catalog,
    assets_dir: Path,
) -> dict:
    """
    Embed every catalog item and add it to the store, one at a time.
    The first failure aborts the run; items added before it stay in the store.
    """
    images = 0
    texts = 0

    for entry in assign_ids(catalog):
        if entry.kind == "image":
            add_image(store, embedder, entry.value, entry.id, assets_dir)
            images += 1
        else:
            add_text(store, embedder, entry.value, entry.id)
            texts += 1

    summary = {
        "images": images,
        "texts": texts,
        "added": images + texts,
        "store_dir": str(store.persist_dir),
    }
    log.info("Ingestion finished: %s", summary)
    return summary


def partial_store_dir(store_dir: Path) -> Path:
    return store_dir.with_name(store_dir.name + ".partial")


def open_or_build_store(
    store_dir: Path,
    embedder: EmbeddingsClient,
    catalog: Catalog,
    assets_dir: Path,
    collection_name: str = DEFAULT_COLLECTION,
) -> Tuple[ChromaVectorStore, dict]:
    """
    Open the store at store_dir, building it from the catalog only when the
    directory does not exist yet. An existing store is never re-ingested.

    An interrupted build leaves at most a "<store_dir>.partial" directory,
    which the next build discards.
    """
    store_dir = Path(store_dir)

    if ChromaVectorStore.exists(store_dir):
        store = ChromaVectorStore(store_dir, collection_name=collection_name)
        summary = {
            "skipped": True,
            "images": 0,
            "texts": 0,
            "added": 0,
            "documents": store.count(),
            "store_dir": str(store_dir),
        }
        log.info("Vector store already present, skipping ingestion: %s", summary)
        return store, summary

    log.info("No vector store at %s, ingesting %d images and %d texts",
             store_dir, len(catalog.images), len(catalog.texts))

    # Build next to the final location; only a completed build is renamed into place
    partial_dir = partial_store_dir(store_dir)
    if partial_dir.exists():
        log.warning("Discarding leftover partial store at %s", partial_dir)
        shutil.rmtree(partial_dir)

    partial = ChromaVectorStore(partial_dir, collection_name=collection_name)
    try:
        summary = ingest_catalog(partial, embedder, catalog, assets_dir)
    except BaseException:
        log.error("Ingestion failed, removing partial store at %s", partial_dir)
        partial.close()
        shutil.rmtree(partial_dir, ignore_errors=True)
        raise

    partial.close()
    partial_dir.rename(store_dir)

    store = ChromaVectorStore(store_dir, collection_name=collection_name)
    summary.update(skipped=False, documents=store.count(), store_dir=str(store_dir))
    return store, summary
