"""Predefined interior styles offered in the style picker."""

from __future__ import annotations

from .models import Style

STYLES: tuple[Style, ...] = (
    Style(
        id="mcm",
        name="Mid-Century",
        prompt=(
            "Mid-Century Modern interior design style, teak wood, organic curves, "
            "clean lines"
        ),
        thumbnail="https://picsum.photos/id/401/300/400",
    ),
    Style(
        id="scandi",
        name="Scandinavian",
        prompt=(
            "Scandinavian interior design, minimalist, bright, white walls, "
            "light wood, cozy textiles"
        ),
        thumbnail="https://picsum.photos/id/201/300/400",
    ),
    Style(
        id="industrial",
        name="Industrial",
        prompt=(
            "Industrial loft style, exposed brick, metal accents, leather furniture, "
            "raw materials"
        ),
        thumbnail="https://picsum.photos/id/364/300/400",
    ),
    Style(
        id="boho",
        name="Bohemian",
        prompt=(
            "Bohemian eclectic style, many plants, patterned rugs, warm colors, "
            "rattan furniture"
        ),
        thumbnail="https://picsum.photos/id/431/300/400",
    ),
    Style(
        id="japandi",
        name="Japandi",
        prompt=(
            "Japandi style, blend of Japanese rustic minimalism and Scandinavian "
            "functionality, neutral tones"
        ),
        thumbnail="https://picsum.photos/id/60/300/400",
    ),
)
