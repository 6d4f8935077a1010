"""
Tests for detection table wrangling: column names, coordinates, dates and
confidence categories.
"""

from datetime import date, datetime

import geopandas as gpd
import polars as pl
import pytest
from shapely.geometry import Point, box

from wildfire_data.utils import (
    check_coordinates,
    normalize_columns,
    normalize_confidence,
    parse_acq_date,
    prepare_detections,
    to_polars,
)


class TestNormalizeConfidence:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("l", "low"),
            ("n", "medium"),
            ("h", "high"),
            (" H ", "high"),
            ("nominal", "medium"),
            ("Low", "low"),
            ("medium", "medium"),
        ],
    )
    def test_categorical_values(self, raw, expected):
        df = normalize_confidence(pl.DataFrame({"confidence": [raw]}))
        assert df["confidence"].to_list() == [expected]

    @pytest.mark.parametrize(
        "raw, expected",
        [(0, "low"), (29, "low"), (30, "medium"), (79, "medium"), (80, "high"), (100, "high")],
    )
    def test_modis_percentages(self, raw, expected):
        df = normalize_confidence(pl.DataFrame({"confidence": [raw]}))
        assert df["confidence"].to_list() == [expected]

    def test_out_of_range_percentage_raises(self):
        with pytest.raises(ValueError, match="Unrecognized confidence"):
            normalize_confidence(pl.DataFrame({"confidence": [150]}))

    def test_null_confidence_raises(self):
        with pytest.raises(ValueError, match="Unrecognized confidence"):
            normalize_confidence(pl.DataFrame({"confidence": ["h", None]}))

    def test_other_columns_untouched(self, detections_df):
        df = normalize_confidence(detections_df)
        assert df.columns == detections_df.columns
        assert df["frp"].to_list() == detections_df["frp"].to_list()


class TestParseAcqDate:

    def test_string_dates(self):
        df = parse_acq_date(pl.DataFrame({"acq_date": ["2025-01-01"]}))
        assert df["acq_date"].to_list() == [date(2025, 1, 1)]

    def test_datetime_dates(self):
        df = parse_acq_date(pl.DataFrame({"acq_date": [datetime(2025, 1, 2, 0, 0)]}))
        assert df.schema["acq_date"] == pl.Date
        assert df["acq_date"].to_list() == [date(2025, 1, 2)]

    def test_without_date_column(self):
        df = pl.DataFrame({"frp": [1.0]})
        assert parse_acq_date(df).equals(df)


class TestToPolars:

    def test_derives_coordinates_from_points(self):
        gdf = gpd.GeoDataFrame(
            {"acq_date": ["2025-01-01"]},
            geometry=[Point(-120.5, 38.1)],
            crs="EPSG:4326",
        )
        df = to_polars(gdf)
        assert "geometry" not in df.columns
        assert df["latitude"].to_list() == [pytest.approx(38.1)]
        assert df["longitude"].to_list() == [pytest.approx(-120.5)]

    def test_derives_coordinates_from_polygons(self):
        gdf = gpd.GeoDataFrame(
            {"acq_date": ["2025-01-01"]},
            geometry=[box(-120.50, 38.10, -120.49, 38.11)],
            crs="EPSG:4326",
        )
        df = to_polars(gdf)
        assert 38.10 < df["latitude"][0] < 38.11
        assert -120.50 < df["longitude"][0] < -120.49

    def test_keeps_existing_coordinates(self, detections_df):
        gdf = gpd.GeoDataFrame(
            detections_df.to_pandas(),
            geometry=gpd.points_from_xy([0.0] * 5, [0.0] * 5),
            crs="EPSG:4326",
        )
        df = to_polars(gdf)
        assert df["latitude"].to_list() == detections_df["latitude"].to_list()

    def test_polars_passthrough(self, detections_df):
        assert to_polars(detections_df) is detections_df


class TestNormalizeColumns:

    def test_lowercases_attributes(self):
        gdf = gpd.GeoDataFrame(
            {"ACQ_DATE": ["2025-01-01"], "CONFIDENCE": ["h"]},
            geometry=[Point(0, 0)],
        )
        normalized = normalize_columns(gdf)
        assert list(normalized.columns) == ["acq_date", "confidence", "geometry"]
        assert normalized.geometry.name == "geometry"


class TestPrepareDetections:

    def test_prepares_dates_and_confidence(self, detections_df):
        df = prepare_detections(detections_df)
        assert df.schema["acq_date"] == pl.Date
        assert df["confidence"].to_list() == ["high", "high", "low", "medium", "medium"]
        assert len(df) == len(detections_df)

    def test_without_confidence_column(self, detections_df):
        df = prepare_detections(detections_df.drop("confidence"))
        assert "confidence" not in df.columns


class TestCheckCoordinates:

    def test_complete_coordinates(self, detections_df):
        assert check_coordinates(detections_df) is detections_df

    def test_blank_latitude_raises(self, blank_coordinate_df):
        with pytest.raises(ValueError, match="1 detections with missing coordinates"):
            check_coordinates(blank_coordinate_df)

    def test_missing_column_raises(self, detections_df):
        with pytest.raises(ValueError, match="longitude"):
            check_coordinates(detections_df.drop("longitude"))
