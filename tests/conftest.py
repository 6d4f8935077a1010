"""
Shared fixtures: a small FIRMS detection table written out as CSV, shapefile,
KML and KMZ files.

Run:
    pytest tests/ -v
"""

import zipfile

import geopandas as gpd
import matplotlib
import polars as pl
import pytest
from shapely.geometry import box

matplotlib.use("Agg")

# Five detections: 2025-01-01 x3 (high, high, low), 2025-01-02 x2 (medium, medium)
DETECTIONS = {
    "latitude": [38.10, 38.12, 38.30, 37.95, 37.90],
    "longitude": [-120.50, -120.48, -120.10, -119.80, -119.85],
    "acq_date": ["2025-01-01", "2025-01-01", "2025-01-01", "2025-01-02", "2025-01-02"],
    "acq_time": [912, 912, 2048, 930, 931],
    "satellite": ["N", "N", "N", "N20", "N20"],
    "confidence": ["h", "h", "l", "n", "n"],
    "frp": [12.4, 8.1, 1.9, 5.5, 6.0],
}

KML_DOCUMENT = """<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
<Document>
  <Schema name="fire_pixel" id="fire_pixel">
    <SimpleField name="acq_date" type="string"/>
    <SimpleField name="confidence" type="string"/>
  </Schema>
  <Folder>
    <name>Fire Pixels</name>
    <Placemark>
      <name>Pixel 1</name>
      <ExtendedData><SchemaData schemaUrl="#fire_pixel">
        <SimpleData name="acq_date">2025-01-01</SimpleData>
        <SimpleData name="confidence">h</SimpleData>
      </SchemaData></ExtendedData>
      <Polygon><outerBoundaryIs><LinearRing><coordinates>
        -120.50,38.10 -120.49,38.10 -120.49,38.11 -120.50,38.11 -120.50,38.10
      </coordinates></LinearRing></outerBoundaryIs></Polygon>
    </Placemark>
    <Placemark>
      <name>Pixel 2</name>
      <ExtendedData><SchemaData schemaUrl="#fire_pixel">
        <SimpleData name="acq_date">2025-01-02</SimpleData>
        <SimpleData name="confidence">n</SimpleData>
      </SchemaData></ExtendedData>
      <Polygon><outerBoundaryIs><LinearRing><coordinates>
        -119.80,37.95 -119.79,37.95 -119.79,37.96 -119.80,37.96 -119.80,37.95
      </coordinates></LinearRing></outerBoundaryIs></Polygon>
    </Placemark>
  </Folder>
  <Folder>
    <name>Centroids</name>
    <Placemark>
      <name>Centroid 1</name>
      <Point><coordinates>-120.495,38.105</coordinates></Point>
    </Placemark>
  </Folder>
</Document>
</kml>
"""


@pytest.fixture
def detections_df():
    return pl.DataFrame(DETECTIONS)


@pytest.fixture
def csv_path(tmp_path, detections_df):
    path = tmp_path / "fire_nrt.csv"
    detections_df.write_csv(path)
    return path


@pytest.fixture
def shapefile_path(tmp_path, detections_df):
    """Point-geometry shapefile with FIRMS-style upper-case fields and no coordinate columns."""
    attributes = detections_df.drop(["latitude", "longitude"]).to_pandas()
    attributes.columns = [col.upper() for col in attributes.columns]
    gdf = gpd.GeoDataFrame(
        attributes,
        geometry=gpd.points_from_xy(DETECTIONS["longitude"], DETECTIONS["latitude"]),
        crs="EPSG:4326",
    )
    path = tmp_path / "fire_archive.shp"
    gdf.to_file(path)
    return path


@pytest.fixture
def kml_path(tmp_path):
    path = tmp_path / "firms.kml"
    path.write_text(KML_DOCUMENT, encoding="utf-8")
    return path


@pytest.fixture
def kmz_path(tmp_path):
    path = tmp_path / "firms.kmz"
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("doc.kml", KML_DOCUMENT)
    return path


@pytest.fixture
def blank_coordinate_df(detections_df):
    """The detection table with the fourth row's latitude left blank."""
    return detections_df.with_columns(
        pl.when(pl.col("acq_time") == 930)
        .then(None)
        .otherwise(pl.col("latitude"))
        .alias("latitude")
    )


@pytest.fixture
def blank_coordinate_csv_path(tmp_path, blank_coordinate_df):
    path = tmp_path / "fire_blank.csv"
    blank_coordinate_df.write_csv(path)
    return path


@pytest.fixture
def footprint_shapefile_path(tmp_path):
    """Two pixel footprint polygons with date and confidence attributes."""
    gdf = gpd.GeoDataFrame(
        {
            "acq_date": ["2025-01-01", "2025-01-02"],
            "confidence": ["h", "n"],
        },
        geometry=[
            box(-120.50, 38.10, -120.49, 38.11),
            box(-119.80, 37.95, -119.79, 37.96),
        ],
        crs="EPSG:4326",
    )
    path = tmp_path / "footprints.shp"
    gdf.to_file(path)
    return path
