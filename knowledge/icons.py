"""Icon kinds for quiz templates and how each one is rendered."""

from enum import Enum


class IconKind(Enum):
    BOOK = "Book"
    GRADUATION_CAP = "GraduationCap"
    CODE = "Code"
    BAR_CHART = "BarChart"
    BOOK_OPEN = "BookOpen"


# Terminal symbols used by the CLI
_SYMBOLS = {
    IconKind.BOOK: "[=]",
    IconKind.GRADUATION_CAP: "[^]",
    IconKind.CODE: "</>",
    IconKind.BAR_CHART: "[#]",
    IconKind.BOOK_OPEN: "[~]",
}

# Lucide component names used by the web UI
_UI_NAMES = {kind: kind.value for kind in IconKind}

_RENDERERS = {
    "symbol": _SYMBOLS,
    "name": _UI_NAMES,
}

for _style, _table in _RENDERERS.items():
    _missing = [k.name for k in IconKind if k not in _table]
    if _missing:
        raise RuntimeError(f"Icon style '{_style}' has no renderer for: {', '.join(_missing)}")


def render_icon(kind: IconKind, style: str = "symbol") -> str:
    """Render an icon kind in the given style ("symbol" or "name")."""
    try:
        table = _RENDERERS[style]
    except KeyError:
        raise ValueError(f"Unknown icon style '{style}'. Use one of: {', '.join(_RENDERERS)}")
    return table[kind]
