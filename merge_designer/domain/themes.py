"""Background themes and accent colors."""
from merge_designer.domain.models import DocumentData

ACCENT_PALETTE = (
    "#0ea5e9",
    "#22d3ee",
    "#14b8a6",
    "#f97316",
    "#f43f5e",
    "#a855f7",
    "#facc15",
)

CUSTOM_BACKGROUND = "custom"
DEFAULT_CUSTOM_BACKGROUND = "#f8fafc"
FALLBACK_BACKGROUND = "#ffffff"

BACKGROUND_THEMES = {
    "sky": {
        "label": "Sky",
        "angle": 135,
        "stops": [(0, "#e0f2fe"), (45, "#fff1f2"), (90, "#dbeafe")],
    },
    "sunset": {
        "label": "Sunset",
        "angle": 135,
        "stops": [(0, "#fef3c7"), (50, "#fed7aa"), (95, "#fbcfe8")],
    },
    "charcoal": {
        "label": "Charcoal",
        "angle": 145,
        "stops": [(0, "#020617"), (55, "#0f172a"), (95, "#1e293b")],
    },
}


def resolve_background_color(document: DocumentData) -> str:
    """Flat fill color for a document: first gradient stop, or the custom color."""
    if document.background == CUSTOM_BACKGROUND:
        return document.custom_background or DEFAULT_CUSTOM_BACKGROUND
    theme = BACKGROUND_THEMES.get(document.background)
    if not theme or not theme["stops"]:
        return FALLBACK_BACKGROUND
    return theme["stops"][0][1]
