"""
FIRMS Detection File Loaders

Reads the archive formats offered on the FIRMS download pages (ESRI
shapefile, KML/KMZ footprints and CSV) into a GeoDataFrame in EPSG:4326.

Missing paths raise FileNotFoundError up front. Malformed files surface the
reader's own error; nothing here returns an empty table in their place.
"""

import os
import zipfile
from pathlib import Path
from typing import List, Optional, Union

import geopandas as gpd
import polars as pl

from ..utils.data_utils import normalize_columns

CRS = "EPSG:4326"

SUPPORTED_SUFFIXES = [".shp", ".kml", ".kmz", ".csv"]


def _require_file(filepath: Union[str, Path]) -> Path:
    path = Path(filepath)
    if not os.path.exists(path):
        raise FileNotFoundError(f"Detection file not found: {path}")
    return path


def load_shapefile(filepath: Union[str, Path]) -> gpd.GeoDataFrame:
    """
    Load a FIRMS shapefile (.shp with its sidecar files).

    Args:
        filepath: Path to the .shp file

    Returns:
        gpd.GeoDataFrame: Detections with lower-cased column names
    """
    path = _require_file(filepath)

    print(f"Loading shapefile: {path}")
    gdf = normalize_columns(gpd.read_file(path))

    # Shapefiles without a .prj carry no CRS; FIRMS exports are WGS84
    if gdf.crs is None:
        gdf = gdf.set_crs(CRS)
    elif gdf.crs != CRS:
        gdf = gdf.to_crs(CRS)
    print(f"Loaded {len(gdf)} features")

    return gdf


def list_kml_layers(filepath: Union[str, Path]) -> List[str]:
    """Return the layer names found in a KML or KMZ file."""
    path = _require_file(filepath)
    if path.suffix.lower() == ".kmz":
        path = extract_kmz(path)
    return gpd.list_layers(path)["name"].tolist()


def extract_kmz(
    filepath: Union[str, Path], output_dir: Optional[Union[str, Path]] = None
) -> Path:
    """
    Unzip a KMZ archive and return the path of its KML document.

    Args:
        filepath: Path to the .kmz file
        output_dir: Where to extract. Defaults to a folder named after the
            archive, next to it.

    Returns:
        Path: The extracted .kml file (doc.kml when the archive has several)

    Raises:
        ValueError: If the archive holds no .kml document
    """
    path = _require_file(filepath)
    target = Path(output_dir) if output_dir else path.with_suffix("")
    target.mkdir(parents=True, exist_ok=True)

    with zipfile.ZipFile(path) as archive:
        kml_names = [
            name for name in archive.namelist() if name.lower().endswith(".kml")
        ]
        if not kml_names:
            raise ValueError(f"No KML document found in {path}")
        archive.extractall(target)

    # KMZ convention: the root document is doc.kml
    kml_names.sort(key=lambda name: (Path(name).name.lower() != "doc.kml", name))
    kml_path = target / kml_names[0]
    print(f"Extracted {path.name} to: {kml_path}")

    return kml_path


def load_kml(
    filepath: Union[str, Path], layer: Optional[str] = None
) -> gpd.GeoDataFrame:
    """
    Load one layer of a KML file; KMZ archives are extracted first.

    Args:
        filepath: Path to a .kml or .kmz file
        layer: Layer (folder) name. Defaults to the first layer.

    Returns:
        gpd.GeoDataFrame: Footprint polygons or points with lower-cased columns
    """
    path = _require_file(filepath)
    if path.suffix.lower() == ".kmz":
        path = extract_kmz(path)

    print(f"Loading KML layer {layer or '(first)'} from: {path}")
    if layer is None:
        gdf = gpd.read_file(path)
    else:
        gdf = gpd.read_file(path, layer=layer)
    gdf = normalize_columns(gdf)
    print(f"Loaded {len(gdf)} features")

    return gdf


def load_csv(
    filepath: Union[str, Path], lat_col: str = "latitude", lon_col: str = "longitude"
) -> gpd.GeoDataFrame:
    """
    Load a FIRMS CSV and build point geometry from its coordinate columns.

    Args:
        filepath: Path to the CSV file
        lat_col: Name of the latitude column
        lon_col: Name of the longitude column

    Returns:
        gpd.GeoDataFrame: One point per detection row

    Raises:
        ValueError: If the coordinate columns are missing or have blank values
    """
    path = _require_file(filepath)

    print(f"Loading CSV: {path}")
    df = pl.read_csv(path)
    df = df.rename({col: col.lower() for col in df.columns})

    lat_col, lon_col = lat_col.lower(), lon_col.lower()
    missing_columns = [col for col in (lat_col, lon_col) if col not in df.columns]
    if missing_columns:
        raise ValueError(f"Missing required columns: {missing_columns}")

    blank_rows = df.filter(pl.col(lat_col).is_null() | pl.col(lon_col).is_null()).height
    if blank_rows > 0:
        raise ValueError(f"Found {blank_rows} rows with missing coordinates in {path}")

    geometry = gpd.points_from_xy(
        df[lon_col].cast(pl.Float64).to_numpy(),
        df[lat_col].cast(pl.Float64).to_numpy(),
    )
    gdf = gpd.GeoDataFrame(df.to_pandas(), geometry=geometry, crs=CRS)
    print(f"Loaded {len(gdf)} detections")

    return gdf


def load_detections(
    filepath: Union[str, Path], layer: Optional[str] = None
) -> gpd.GeoDataFrame:
    """
    Load a FIRMS detection file, choosing the reader from the file suffix.

    Args:
        filepath: Path to a .shp, .kml, .kmz or .csv file
        layer: KML layer name (ignored for the other formats)

    Returns:
        gpd.GeoDataFrame: Loaded detections
    """
    suffix = Path(filepath).suffix.lower()

    if suffix == ".shp":
        return load_shapefile(filepath)
    if suffix in (".kml", ".kmz"):
        return load_kml(filepath, layer=layer)
    if suffix == ".csv":
        return load_csv(filepath)

    raise ValueError(
        f"Unsupported file format: {suffix or filepath}. "
        f"Supported formats: {SUPPORTED_SUFFIXES}"
    )
