"""Content density metrics and the typographic scale derived from them"""

from noteblocks.core.models import (
    HEADING_TYPES, LIST_TYPES, Block, BlockType, ContentMetrics,
    LineHeightTier, TypeToken, TypographyScale,
)


MIN_SCALE = 0.65
MAX_SCALE = 1.0

# (base size, unit) per rendering category
BASE_SIZES: dict[str, tuple[float, str]] = {
    "heading1":  (2.8, "rem"),
    "heading2":  (2.0, "rem"),
    "heading3":  (1.5, "rem"),
    "paragraph": (17.0, "px"),
    "code":      (15.0, "px"),
}

# (body line height, block spacing in rem) per tier
TIERS: dict[LineHeightTier, tuple[float, float]] = {
    LineHeightTier.spacious: (1.7, 0.75),
    LineHeightTier.medium:   (1.55, 0.5),
    LineHeightTier.tight:    (1.4, 0.35),
}
HEADING_LEADING_OFFSET = 0.35


def compute_metrics(blocks: list[Block]) -> ContentMetrics:
    return ContentMetrics(
        total_blocks=len(blocks),
        total_chars=sum(len(b.content) for b in blocks),
        heading_count=sum(1 for b in blocks if b.type in HEADING_TYPES),
        has_code=any(b.type == BlockType.code for b in blocks),
        has_list=any(b.type in LIST_TYPES for b in blocks),
    )


def compute_scale(metrics: ContentMetrics) -> float:
    """Shrink from 1.0 as blocks, characters and headings accumulate.

    Character thresholds are cumulative: a 600-char note pays all three.
    """
    scale = 1.0
    if metrics.total_blocks > 3:
        scale -= 0.04 * min(metrics.total_blocks - 3, 10)
    if metrics.total_chars > 150:
        scale -= 0.08
    if metrics.total_chars > 300:
        scale -= 0.08
    if metrics.total_chars > 500:
        scale -= 0.06
    if metrics.heading_count > 2:
        scale -= 0.04 * min(metrics.heading_count - 2, 4)
    return min(max(round(scale, 4), MIN_SCALE), MAX_SCALE)


def line_height_tier(scale: float) -> LineHeightTier:
    if scale > 0.85:
        return LineHeightTier.spacious
    if scale > 0.75:
        return LineHeightTier.medium
    return LineHeightTier.tight


def build_tokens(scale: float, tier: LineHeightTier) -> dict[str, TypeToken]:
    line_height, spacing = TIERS[tier]
    tokens = {}
    for category, (size, unit) in BASE_SIZES.items():
        leading = line_height - HEADING_LEADING_OFFSET if category.startswith("heading") else line_height
        tokens[category] = TypeToken(
            size=round(size * scale, 3),
            unit=unit,
            line_height=round(leading, 3),
            spacing=spacing,
        )
    return tokens


def compute_typography(blocks: list[Block]) -> TypographyScale:
    """Derive the scale factor and per-category tokens for a finished block sequence."""
    metrics = compute_metrics(blocks)
    scale = compute_scale(metrics)
    tier = line_height_tier(scale)
    return TypographyScale(scale=scale, line_height=tier, metrics=metrics, tokens=build_tokens(scale, tier))
