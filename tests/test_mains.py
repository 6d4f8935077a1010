"""
End-to-end tests for the data and plotting entry points.
"""

import sys
from datetime import date

import polars as pl
import pytest

from tests.markers import requires_kml_driver, requires_libkml_driver
from wildfire_data import data_main
from wildfire_plots import plots_main


class TestDataMain:

    def test_run_writes_aggregations(self, csv_path, tmp_path):
        output_dir = tmp_path / "output"
        daily, by_confidence = data_main.run(csv_path, output_dir=output_dir)

        assert daily.rows() == [(date(2025, 1, 1), 3), (date(2025, 1, 2), 2)]
        assert len(by_confidence) == 3

        written = pl.read_csv(output_dir / "daily_counts.csv")
        assert written["count"].to_list() == [3, 2]
        assert (output_dir / "daily_confidence_counts.csv").exists()

    def test_run_rejects_invalid_table(self, tmp_path, detections_df):
        path = tmp_path / "bad.csv"
        detections_df.drop("confidence").write_csv(path)
        with pytest.raises(ValueError, match="failed validation"):
            data_main.run(path, output_dir=tmp_path / "output")

    def test_run_rejects_blank_coordinates(self, blank_coordinate_csv_path, tmp_path):
        with pytest.raises(ValueError, match="missing coordinates"):
            data_main.run(blank_coordinate_csv_path, output_dir=tmp_path / "output")

    def test_run_footprint_polygons(self, footprint_shapefile_path, tmp_path):
        daily, by_confidence = data_main.run(
            footprint_shapefile_path, output_dir=tmp_path / "output"
        )
        assert daily.rows() == [(date(2025, 1, 1), 1), (date(2025, 1, 2), 1)]
        assert by_confidence["confidence"].to_list() == ["high", "medium"]

    @requires_libkml_driver
    def test_run_kml_footprints(self, kmz_path, tmp_path):
        daily, _ = data_main.run(
            kmz_path, layer="Fire Pixels", output_dir=tmp_path / "output"
        )
        assert daily["count"].to_list() == [1, 1]

    def test_main_exits_on_missing_file(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(
            sys, "argv", ["firms-data", "--input", str(tmp_path / "absent.csv")]
        )
        with pytest.raises(SystemExit) as exc_info:
            data_main.main()
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().out


class TestPlotsMain:

    def test_run_points(self, csv_path, tmp_path):
        outputs = plots_main.run(csv_path, output_dir=tmp_path / "plots")
        assert set(outputs) == {
            "daily_line",
            "daily_bar",
            "confidence_bars",
            "static_map",
            "point_map",
            "heatmap",
            "timeline_map",
            "animation",
        }
        for path in outputs.values():
            assert path.exists()

    @requires_kml_driver
    def test_run_footprints(self, kml_path, tmp_path):
        outputs = plots_main.run(kml_path, layer="Fire Pixels", output_dir=tmp_path / "plots")
        assert list(outputs) == ["footprint_map"]
        assert outputs["footprint_map"].exists()

    def test_run_rejects_blank_coordinates(self, blank_coordinate_csv_path, tmp_path):
        with pytest.raises(ValueError, match="missing coordinates"):
            plots_main.run(blank_coordinate_csv_path, output_dir=tmp_path / "plots")

    def test_main_exits_on_unsupported_file(self, tmp_path, monkeypatch):
        path = tmp_path / "fires.txt"
        path.write_text("nothing")
        monkeypatch.setattr(
            sys, "argv", ["firms-plots", "--input", str(path), "--output", str(tmp_path)]
        )
        with pytest.raises(SystemExit) as exc_info:
            plots_main.main()
        assert exc_info.value.code == 1
