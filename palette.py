"""Category colors, checked against the dataset vocabulary at startup."""

import logging

from data_loader import DatasetError

logger = logging.getLogger(__name__)

GROWTH_COLORS = {
    'Growth': '#3fb950',
    'Stable': '#d29922',
    'Decline': '#f85149',
}

ADOPTION_COLORS = {
    'High': '#bc8cff',
    'Medium': '#58a6ff',
    'Low': '#6e7681',
}

# record field -> palette
CATEGORY_PALETTES = {
    'growth_projection': GROWTH_COLORS,
    'ai_adoption': ADOPTION_COLORS,
}

EXPOSURE_COLORSCALE = [[0, '#64748b'], [1, '#8b5cf6']]
CLOUD_COLORS = ['#3b82f6', '#8b5cf6', '#10b981', '#f59e0b']
BAR_COLOR = '#3b82f6'


class UnknownCategoryError(DatasetError):
    """The dataset holds a category label that has no color assigned."""


def validate_vocabulary(records):
    """Raise UnknownCategoryError if any observed label is missing from its palette."""
    problems = []
    for field, palette in CATEGORY_PALETTES.items():
        unknown = sorted(set(records[field].unique()) - set(palette))
        if unknown:
            problems.append(f"{field}: {', '.join(repr(u) for u in unknown)}")

    if problems:
        raise UnknownCategoryError("Unrecognized category labels - " + "; ".join(problems))
    logger.info("✓ Category vocabulary validated")


def category_color(field, label):
    """Color for a validated label of `field`."""
    return CATEGORY_PALETTES[field][label]
