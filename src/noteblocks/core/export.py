"""Export: serialize blocks back to Markdown-like text or a JSON document, and write output files"""

import json
from pathlib import Path
from typing import Callable

from noteblocks.core.models import Block, BlockType, TypographyScale


LINE_FORMATS: dict[BlockType, Callable[[Block], str]] = {
    BlockType.heading1:   lambda b: f"# {b.content}",
    BlockType.heading2:   lambda b: f"## {b.content}",
    BlockType.heading3:   lambda b: f"### {b.content}",
    BlockType.todo:       lambda b: f"- [{'x' if b.checked else ' '}] {b.content}",
    BlockType.bullet:     lambda b: f"{'  ' * (b.indent_level or 0)}- {b.content}",
    BlockType.numbered:   lambda b: f"{b.number or 1}. {b.content}",
    BlockType.blockquote: lambda b: f"> {b.content}",
    BlockType.code:       lambda b: f"```\n{b.content}\n```",
    BlockType.divider:    lambda b: "---",
    BlockType.tag:        lambda b: f"#{b.content.lstrip('#')}",
}


def block_to_line(block: Block) -> str:
    """Render one block as the Markdown-like line the scanner would read back."""
    fmt = LINE_FORMATS.get(block.type)
    return fmt(block) if fmt else block.content


def blocks_to_text(blocks: list[Block]) -> str:
    """Join rendered blocks with newlines (one block per line, code fenced)."""
    return "\n".join(block_to_line(b) for b in blocks)


def build_document(blocks: list[Block], typography: TypographyScale) -> dict:
    """Build the JSON document handed to the presentation layer."""
    return {
        "blocks": [b.model_dump(mode="json", by_alias=True, exclude_none=True) for b in blocks],
        "typography": typography.model_dump(mode="json"),
    }


def write_note(
    stem: str,
    blocks: list[Block],
    typography: TypographyScale,
    output_dir: Path,
    fmt: str = "json",
    ) -> Path:
    """Write one normalized note as <stem>.json or <stem>.md; returns the path."""
    output_dir.mkdir(parents=True, exist_ok=True)
    if fmt == "md":
        out = output_dir / f"{stem}.md"
        out.write_text(blocks_to_text(blocks) + "\n", encoding="utf-8")
    else:
        out = output_dir / f"{stem}.json"
        out.write_text(
            json.dumps(build_document(blocks, typography), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
    return out
