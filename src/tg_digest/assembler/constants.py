"""Presentation constants shared by the digest and cards templates.

Header texts, icons and CSS filter classes are part of the contract with
the HTML templates.
"""

from typing import Final

from tg_digest.ranker.metric import Metric


ICON_BASE_URL: Final[str] = (
    "https://raw.githubusercontent.com/googlefonts/noto-emoji/main/svg/emoji_u{}.svg"
)
FALLBACK_ICON: Final[str] = "❌"
WARNING_ICON: Final[str] = "⚠️"

UNDEFINED_HEADER: Final[str] = "UNDEFINED"
UNDEFINED_CARD_ID: Final[int] = -1

BLUE_FILTER: Final[str] = "filter-blue"

# Block headers on the digest page
BLOCK_HEADERS: Final[dict[Metric, str]] = {
    Metric.REPLIES: "По комментариям",
    Metric.REACTIONS: "По реакциям",
    Metric.FORWARDS: "По репостам",
    Metric.VIEWS: "По просмотрам",
}

# Card headers on the "best of" cards page
CARD_HEADERS: Final[dict[Metric, str]] = {
    Metric.REPLIES: "Лучший по комментариям",
    Metric.REACTIONS: "Лучший по реакциям",
    Metric.FORWARDS: "Лучший по репостам",
    Metric.VIEWS: "Лучший по просмотрам",
}

METRIC_ICONS: Final[dict[Metric, str]] = {
    Metric.REPLIES: "💬",
    Metric.REACTIONS: "👏",
    Metric.FORWARDS: "🔁",
    Metric.VIEWS: "👁️",
}

METRIC_FILTERS: Final[dict[Metric, str]] = {
    Metric.REPLIES: "",
    Metric.REACTIONS: "",
    Metric.FORWARDS: BLUE_FILTER,
    Metric.VIEWS: BLUE_FILTER,
}


def icon_url(icon: str) -> str:
    """Build the Noto emoji SVG URL for the first code point of ``icon``.

    Args:
        icon: Emoji string; only its first code point is used.

    Returns:
        URL of the emoji image.
    """
    first = icon[0] if icon else FALLBACK_ICON
    return ICON_BASE_URL.format(f"{ord(first):04x}")
