from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import List, Sequence

import typer

from multimodal_search.models import MediaType, SearchHit


def output_filename(path: str) -> str:
    """
    Last "/"-separated segment of a stored image path.
    """
    return PurePosixPath(path).name


def render_hits(hits: Sequence[SearchHit], output_dir: Path) -> List[Path]:
    """
    Print each hit's metadata; print text hits, write image hits to output_dir.
    Returns the written image files.
    """
    written: List[Path] = []

    for hit in hits:
        meta = hit.document.metadata
        typer.echo(meta.to_json())

        if meta.media_type is MediaType.TEXT:
            typer.echo(f"Text: {hit.document.content}")
        elif meta.media_type is MediaType.IMAGE:
            target = Path(output_dir) / output_filename(meta.path)
            target.write_bytes(hit.document.image_bytes())
            written.append(target)

    return written
