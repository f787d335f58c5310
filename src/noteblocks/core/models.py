"""Block, metrics, and typography data models for the normalization pipeline"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BlockType(str, Enum):
    """Restrict note blocks to a predefined set of element types"""
    heading1 = "heading1"
    heading2 = "heading2"
    heading3 = "heading3"
    paragraph = "paragraph"
    bullet = "bullet"
    numbered = "numbered"
    todo = "todo"
    blockquote = "blockquote"
    code = "code"
    divider = "divider"
    tag = "tag"


HEADING_TYPES = frozenset({BlockType.heading1, BlockType.heading2, BlockType.heading3})
LIST_TYPES = frozenset({BlockType.bullet, BlockType.numbered, BlockType.todo})


def category_for(block_type: BlockType) -> str:
    """Return the token category a block type renders with."""
    if block_type in HEADING_TYPES:
        return block_type.value
    if block_type == BlockType.code:
        return "code"
    return "paragraph"


class Block(BaseModel):
    """A single classified unit of note content."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = ""
    type: BlockType
    content: str = ""
    checked: Optional[bool] = None                                        # todo only
    number: Optional[int] = Field(default=None, ge=1)                     # numbered only
    indent_level: Optional[int] = Field(default=None, ge=0, alias="indentLevel")  # bullet only

    def same_as(self, other: "Block") -> bool:
        """True when both blocks share (type, content); ids are ignored."""
        return self.type == other.type and self.content == other.content


class ContentMetrics(BaseModel):
    """Read-only density figures derived from a block sequence."""
    total_blocks:  int = 0
    total_chars:   int = 0
    heading_count: int = 0
    has_code:      bool = False
    has_list:      bool = False


class LineHeightTier(str, Enum):
    spacious = "spacious"
    medium = "medium"
    tight = "tight"


class TypeToken(BaseModel):
    """Size, line-height and spacing for one block category."""
    size:        float
    unit:        str
    line_height: float
    spacing:     float


class TypographyScale(BaseModel):
    """Density-driven scale factor plus the derived per-category token table."""
    scale:       float = Field(..., ge=0.65, le=1.0)
    line_height: LineHeightTier
    metrics:     ContentMetrics
    tokens:      dict[str, TypeToken]

    def token_for(self, block_type: BlockType) -> TypeToken:
        """Look up the token a block of this type renders with."""
        return self.tokens[category_for(block_type)]
