"""
Interactive FIRMS maps.

Creates folium maps of fire detections: a categorical point map, a density
heatmap and a polygon overlay of KML pixel footprints. Each function returns
the map and saves it as HTML when given an output path.
"""

from typing import List, Optional

import folium
import geopandas as gpd
import polars as pl
from folium.plugins import HeatMap

from wildfire_data.utils import (
    CONFIDENCE_LEVELS,
    DetectionTable,
    check_coordinates,
    prepare_detections,
)

from .styles import (
    CONFIDENCE_COLORS,
    FILL_OPACITY,
    FOOTPRINT_COLOR,
    HEATMAP_BLUR,
    HEATMAP_GRADIENT,
    HEATMAP_RADIUS,
    MARKER_RADIUS,
    TILES,
    ZOOM_START,
)

POPUP_COLUMNS = ["acq_date", "acq_time", "confidence", "satellite", "frp"]


def create_base_map(min_lat, min_lon, max_lat, max_lon) -> folium.Map:
    """Create a folium map centered on a bounding box."""
    center_lat = (min_lat + max_lat) / 2
    center_lon = (min_lon + max_lon) / 2

    m = folium.Map(location=[center_lat, center_lon], zoom_start=ZOOM_START, tiles=TILES)
    return m


def _detection_bounds(df: pl.DataFrame) -> List[float]:
    if df.is_empty():
        raise ValueError("No detections to map")
    check_coordinates(df)
    return [
        df["latitude"].min(),
        df["longitude"].min(),
        df["latitude"].max(),
        df["longitude"].max(),
    ]


def _save(m: folium.Map, output_path: Optional[str]) -> None:
    if output_path:
        print(f"Saving interactive map to: {output_path}")
        m.save(output_path)


def _popup_text(row: dict) -> str:
    lines = [f"{col}: {row[col]}" for col in POPUP_COLUMNS if col in row]
    return "<br>".join(lines)


def add_legend(m: folium.Map, title: str = "Detection Confidence") -> None:
    """Add a fixed-position confidence legend to a map."""
    items = "".join(
        f'<p><i class="fa fa-circle" style="color:{CONFIDENCE_COLORS[level]}"></i> '
        f"{level.capitalize()}</p>"
        for level in CONFIDENCE_LEVELS
    )
    legend_html = f"""
    <div style="position: fixed;
                bottom: 50px; left: 50px; width: 180px;
                background-color: white; border:2px solid grey; z-index:9999;
                font-size:14px; padding: 10px">
    <h4>{title}</h4>
    {items}
    </div>
    """
    m.get_root().html.add_child(folium.Element(legend_html))


def create_detection_map(
    table: DetectionTable, output_path: Optional[str] = None
) -> folium.Map:
    """
    Create an interactive point map with one layer per confidence level.

    Args:
        table: Point detections
        output_path: Path to save the HTML map

    Returns:
        folium.Map: Interactive map object
    """
    print("Creating detection map...")
    df = prepare_detections(table)
    m = create_base_map(*_detection_bounds(df))

    for level in CONFIDENCE_LEVELS:
        level_group = folium.FeatureGroup(name=f"{level.capitalize()} confidence")
        for row in df.filter(pl.col("confidence") == level).iter_rows(named=True):
            folium.CircleMarker(
                location=[row["latitude"], row["longitude"]],
                radius=MARKER_RADIUS,
                popup=folium.Popup(_popup_text(row), max_width=300),
                color=CONFIDENCE_COLORS[level],
                fill=True,
                fillColor=CONFIDENCE_COLORS[level],
                fillOpacity=FILL_OPACITY,
                weight=1,
            ).add_to(level_group)
        level_group.add_to(m)

    add_legend(m)
    folium.LayerControl().add_to(m)

    _save(m, output_path)
    return m


def create_heatmap(
    table: DetectionTable,
    output_path: Optional[str] = None,
    radius: int = HEATMAP_RADIUS,
) -> folium.Map:
    """
    Create a detection density heatmap.

    Args:
        table: Point detections
        output_path: Path to save the HTML map
        radius: Heat point radius in pixels
    """
    print("Creating heatmap...")
    df = prepare_detections(table)
    m = create_base_map(*_detection_bounds(df))

    heat_data = df.select(["latitude", "longitude"]).rows()
    HeatMap(
        heat_data,
        name="Detection density",
        radius=radius,
        blur=HEATMAP_BLUR,
        gradient=HEATMAP_GRADIENT,
    ).add_to(m)

    folium.LayerControl().add_to(m)

    _save(m, output_path)
    return m


def create_footprint_map(
    gdf: gpd.GeoDataFrame, output_path: Optional[str] = None
) -> folium.Map:
    """
    Create a map of detection footprint polygons (FIRMS KML/KMZ pixels).

    Args:
        gdf: Footprint polygons from load_kml
        output_path: Path to save the HTML map
    """
    print("Creating footprint map...")
    if gdf.empty:
        raise ValueError("No footprints to map")

    bounds = gdf.total_bounds  # [minx, miny, maxx, maxy]
    m = create_base_map(bounds[1], bounds[0], bounds[3], bounds[2])

    tooltip_fields = [col for col in ("name", "acq_date") if col in gdf.columns]

    # GeoJSON properties must be JSON serializable
    footprints = gdf[tooltip_fields + [gdf.geometry.name]].copy()
    for col in tooltip_fields:
        footprints[col] = footprints[col].astype(str)

    footprint_group = folium.FeatureGroup(name="Fire footprints")
    folium.GeoJson(
        footprints,
        style_function=lambda x: {
            "fillColor": FOOTPRINT_COLOR,
            "color": "darkred",
            "weight": 1,
            "fillOpacity": FILL_OPACITY,
        },
        tooltip=folium.GeoJsonTooltip(fields=tooltip_fields) if tooltip_fields else None,
    ).add_to(footprint_group)
    footprint_group.add_to(m)

    folium.LayerControl().add_to(m)

    _save(m, output_path)
    return m
