"""
Shared styling for FIRMS charts and maps.
"""

# Color scheme
CONFIDENCE_COLORS = {
    "low": "#FFD700",  # Gold for low confidence
    "medium": "#FFA500",  # Orange for nominal confidence
    "high": "#FF0000",  # Red for high confidence
}

FOOTPRINT_COLOR = "#FF4500"

MARKER_RADIUS = 4
FILL_OPACITY = 0.7
HEATMAP_RADIUS = 12
HEATMAP_BLUR = 15
HEATMAP_GRADIENT = {0.2: "yellow", 0.5: "orange", 0.8: "red", 1.0: "darkred"}

# Map defaults
ZOOM_START = 6
TILES = "OpenStreetMap"
