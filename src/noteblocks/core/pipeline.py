"""Pipeline step functions: normalize note files, report typography and tags"""

import logging
from collections import Counter
from contextlib import nullcontext
from pathlib import Path

from sqlmodel import Session

from noteblocks.core.export import write_note
from noteblocks.core.models import Block, TypographyScale
from noteblocks.core.normalize import normalize
from noteblocks.core.parse import discover_files
from noteblocks.core.typography import compute_typography
from noteblocks.core.utils.tags import extract_tags
from noteblocks.crud.cache import get_cached, store


logger = logging.getLogger(__name__)


def normalize_note(
    raw: str,
    engine: str = 'lines',
    parser_config: str = 'gfm-like',
    session: Session | None = None,
    ) -> tuple[list[Block], TypographyScale]:
    """Normalize raw content and compute its typography, memoized through session if given."""
    blocks = get_cached(session, raw, engine, parser_config) if session is not None else None
    if blocks is None:
        blocks = normalize(raw, engine=engine, parser_config=parser_config)
        typography = compute_typography(blocks)
        if session is not None:
            store(session, raw, blocks, typography.scale, engine, parser_config)
    else:
        logger.debug("Cache hit for %d char note", len(raw))
        typography = compute_typography(blocks)
    return blocks, typography


def _read(p: Path) -> str:
    try:
        return p.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise RuntimeError(f"Failed to normalize {p}: {e}") from e


def _relative_dir(root: Path, p: Path) -> Path:
    return p.parent.relative_to(root) if root.is_dir() else Path()


def _output_stems(files: list[Path]) -> dict[Path, str]:
    """Output stem per note; notes sharing a stem in one directory keep their suffix."""
    counts = Counter((p.parent, p.stem) for p in files)
    return {p: p.name if counts[(p.parent, p.stem)] > 1 else p.stem for p in files}


def run_normalize(
    path: str,
    output_dir: Path,
    fmt: str = 'json',
    engine: str = 'lines',
    parser_config: str = 'gfm-like',
    db_engine=None,
    ) -> list[tuple[Path, Path]]:
    """Normalize every note file under path into output_dir. Returns (source, output) pairs.

    When db_engine is given, results are memoized in the normalization cache.
    """
    root = Path(path)
    results = []
    with (Session(db_engine) if db_engine is not None else nullcontext()) as session:
        files = discover_files(root)
        stems = _output_stems(files)
        for p in files:
            blocks, typography = normalize_note(_read(p), engine, parser_config, session)
            out = write_note(stems[p], blocks, typography, output_dir / _relative_dir(root, p), fmt)
            results.append((p, out))
        if session is not None:
            session.commit()
    return results


def run_typography(path: str, engine: str = 'lines', parser_config: str = 'gfm-like') -> list[tuple[Path, TypographyScale]]:
    """Compute the typography scale for every note file under path."""
    return [
        (p, normalize_note(_read(p), engine, parser_config)[1])
        for p in discover_files(Path(path))
    ]


def run_tags(path: str) -> list[tuple[Path, list[str]]]:
    """Extract hashtags from every note file under path."""
    return [(p, extract_tags(_read(p))) for p in discover_files(Path(path))]
