"""
FIRMS (Fire Information for Resource Management System) Package

This package provides functionality for downloading NASA FIRMS fire detection
data and loading the shapefile, KML/KMZ and CSV archives into GeoDataFrames.
"""

from .firms_collect import (
    SOURCES,
    build_area_url,
    create_session,
    download_detections,
    fetch_area_csv,
)
from .firms_load import (
    extract_kmz,
    list_kml_layers,
    load_csv,
    load_detections,
    load_kml,
    load_shapefile,
)

__all__ = [
    'SOURCES',
    'build_area_url',
    'create_session',
    'download_detections',
    'fetch_area_csv',
    'extract_kmz',
    'list_kml_layers',
    'load_csv',
    'load_detections',
    'load_kml',
    'load_shapefile',
]
