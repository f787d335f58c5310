"""Entry dispatcher: route raw note content to the walker or the line scanner"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from noteblocks.core.adapters import MarkdownItAdapter, SoupAdapter
from noteblocks.core.merge import merge
from noteblocks.core.models import Block
from noteblocks.core.parse import looks_like_markup, parse_html, parse_markdown
from noteblocks.core.scan import scan_lines
from noteblocks.core.walk import walk_tree


logger = logging.getLogger(__name__)

ENGINES = ('lines', 'markdown-it')


def _from_sequence(raw: list | tuple) -> list[Block]:
    """Pass built blocks through untouched; validate stored (dict) sequences."""
    if all(isinstance(b, Block) for b in raw):
        return raw
    if all(isinstance(b, Mapping) for b in raw):
        try:
            return [Block.model_validate(b) for b in raw]
        except ValidationError as e:
            logger.warning("Discarding invalid stored block sequence: %s", e)
            return []
    logger.warning("Discarding block sequence with unsupported items")
    return []


def _normalize_text(text: str, engine: str, parser_config: str) -> list[Block]:
    if looks_like_markup(text):
        try:
            return merge(walk_tree(parse_html(text), SoupAdapter()))
        except Exception as e:
            logger.warning("Markup walk failed, scanning as text instead: %s", e)
            return merge(scan_lines(text))

    if engine == 'markdown-it':
        try:
            return merge(walk_tree(parse_markdown(text, parser_config), MarkdownItAdapter()))
        except Exception as e:
            logger.warning("markdown-it walk failed, scanning as text instead: %s", e)

    return merge(scan_lines(text))


def normalize(raw: Any, engine: str = 'lines', parser_config: str = 'gfm-like') -> list[Block]:
    """Convert raw note content into a canonical block sequence.

    A sequence of Blocks is returned unchanged. Empty or unsupported input
    yields an empty sequence. Strings containing a tag pattern are walked as
    HTML; everything else is scanned line by line (or, with
    engine='markdown-it', walked as a markdown-it syntax tree). Never raises.
    """
    if isinstance(raw, (list, tuple)):
        return _from_sequence(raw)
    if not isinstance(raw, str) or not raw.strip():
        return []
    blocks = _normalize_text(raw, engine, parser_config)
    logger.debug("Normalized %d char(s) into %d block(s)", len(raw), len(blocks))
    return blocks
