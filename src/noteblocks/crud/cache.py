"""Normalization cache: look up and store block sequences by raw-content hash"""

import hashlib
import logging

from pydantic import ValidationError
from sqlmodel import Session, select

from noteblocks.core.models import Block
from noteblocks.crud.models import NormalizedNote


logger = logging.getLogger(__name__)


def content_hash(raw: str) -> str:
    """Hex SHA-256 of raw note content (64 chars, the cache row key)."""
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def engine_variant(engine: str, parser_config: str = "gfm-like") -> str:
    """Cache column value for an engine; markdown-it results also depend on the preset."""
    return f"{engine}:{parser_config}" if engine == "markdown-it" else engine


def _get_row(session: Session, key: str, engine: str) -> NormalizedNote | None:
    return session.exec(
        select(NormalizedNote).where(NormalizedNote.hash == key, NormalizedNote.engine == engine)
    ).one_or_none()


def get_cached(
    session: Session, raw: str, engine: str = "lines", parser_config: str = "gfm-like",
    ) -> list[Block] | None:
    """Return the cached blocks for raw content, or None on a miss or unreadable row."""
    row = _get_row(session, content_hash(raw), engine_variant(engine, parser_config))
    if row is None:
        return None
    try:
        return [Block.model_validate(b) for b in row.blocks]
    except ValidationError as e:
        logger.warning("Ignoring unreadable cache entry %s: %s", row.hash[:12], e)
        return None


def store(
    session: Session,
    raw: str,
    blocks: list[Block],
    scale: float,
    engine: str = "lines",
    parser_config: str = "gfm-like",
    ) -> NormalizedNote:
    """Insert or replace the cache row for raw content."""
    key = content_hash(raw)
    variant = engine_variant(engine, parser_config)
    row = _get_row(session, key, variant)
    payload = [b.model_dump(mode="json", by_alias=True, exclude_none=True) for b in blocks]
    if row is None:
        row = NormalizedNote(hash=key, engine=variant, blocks=payload, scale=scale)
    else:
        row.blocks = payload
        row.scale = scale
    session.add(row)
    session.flush()
    return row
