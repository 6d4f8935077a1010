import marimo

__generated_with = "0.13.15"
app = marimo.App(width="medium")


@app.cell
def _():
    import marimo as mo

    return (mo,)


@app.cell
def _(mo):
    mo.md(
        r"""
        # Exploring NASA FIRMS fire detections

        FIRMS publishes active fire detections from MODIS and VIIRS as
        shapefiles, KML/KMZ footprints and CSV files.

        1. Request an archive at https://firms.modaps.eosdis.nasa.gov/download/
           (or use the *Active Fire Data* page for the last 24h/7d).
        2. Unzip the shapefile archive into `data/`. KMZ files can stay
           zipped, `load_kml` extracts them.
        3. For CSV, either download it from the website or set `FIRMS_MAP_KEY`
           in `.env` and run `python -m wildfire_data.data_main --fetch`.
        """
    )
    return


@app.cell
def _():
    from pathlib import Path

    from wildfire_data.aggregation import (
        count_by_date,
        count_by_date_confidence,
        pivot_confidence_counts,
    )
    from wildfire_data.firms import list_kml_layers, load_csv, load_kml, load_shapefile
    from wildfire_data.utils import prepare_detections
    from wildfire_plots import (
        animate_detections,
        create_detection_map,
        create_footprint_map,
        create_heatmap,
        create_timeline_map,
        plot_confidence_counts,
        plot_daily_counts,
        plot_detection_points,
    )

    DATA_DIR = Path("data")
    OUTPUT_DIR = Path("plots")
    OUTPUT_DIR.mkdir(exist_ok=True)
    return (
        DATA_DIR,
        OUTPUT_DIR,
        animate_detections,
        count_by_date,
        count_by_date_confidence,
        create_detection_map,
        create_footprint_map,
        create_heatmap,
        create_timeline_map,
        list_kml_layers,
        load_csv,
        load_kml,
        load_shapefile,
        pivot_confidence_counts,
        plot_confidence_counts,
        plot_daily_counts,
        plot_detection_points,
        prepare_detections,
    )


@app.cell
def _(mo):
    mo.md(r"""## Shapefile""")
    return


@app.cell
def _(DATA_DIR, load_shapefile):
    fires = load_shapefile(DATA_DIR / "fire_archive.shp")
    fires.head()
    return (fires,)


@app.cell
def _(fires, prepare_detections):
    detections = prepare_detections(fires)
    detections.describe()
    return (detections,)


@app.cell
def _(mo):
    mo.md(
        r"""
        ## Detections per day

        Each row is one detection, so counting rows per `acq_date` gives the
        daily activity. Splitting by confidence shows how much of it is
        low-quality.
        """
    )
    return


@app.cell
def _(count_by_date, detections):
    daily_counts = count_by_date(detections)
    daily_counts
    return (daily_counts,)


@app.cell
def _(count_by_date_confidence, detections):
    count_by_date_confidence(detections)
    return


@app.cell
def _(OUTPUT_DIR, daily_counts, plot_daily_counts):
    plot_daily_counts(daily_counts, kind="line", output_path=OUTPUT_DIR / "daily_line.png")
    return


@app.cell
def _(OUTPUT_DIR, daily_counts, plot_daily_counts):
    plot_daily_counts(daily_counts, kind="bar", output_path=OUTPUT_DIR / "daily_bar.png")
    return


@app.cell
def _(OUTPUT_DIR, detections, pivot_confidence_counts, plot_confidence_counts):
    plot_confidence_counts(
        pivot_confidence_counts(detections),
        output_path=OUTPUT_DIR / "daily_confidence.png",
    )
    return


@app.cell
def _(mo):
    mo.md(r"""## Maps""")
    return


@app.cell
def _(fires, plot_detection_points):
    plot_detection_points(fires)
    return


@app.cell
def _(create_detection_map, fires):
    create_detection_map(fires)
    return


@app.cell
def _(create_heatmap, fires):
    create_heatmap(fires)
    return


@app.cell
def _(mo):
    mo.md(
        r"""
        ## Time animation

        The timeline map adds a slider stepping through acquisition dates;
        the GIF shows detections accumulating day by day.
        """
    )
    return


@app.cell
def _(create_timeline_map, fires):
    create_timeline_map(fires)
    return


@app.cell
def _(OUTPUT_DIR, animate_detections, fires, mo):
    gif_path = animate_detections(fires, OUTPUT_DIR / "detections.gif")
    mo.image(src=str(gif_path))
    return


@app.cell
def _(mo):
    mo.md(
        r"""
        ## KMZ footprints

        The KMZ download holds the footprint of every detection pixel as a
        polygon, grouped in layers.
        """
    )
    return


@app.cell
def _(DATA_DIR, list_kml_layers):
    kmz_path = DATA_DIR / "firms.kmz"
    list_kml_layers(kmz_path)
    return (kmz_path,)


@app.cell
def _(create_footprint_map, kmz_path, load_kml):
    footprints = load_kml(kmz_path)
    create_footprint_map(footprints)
    return


@app.cell
def _(mo):
    mo.md(r"""## CSV""")
    return


@app.cell
def _(DATA_DIR, count_by_date, load_csv):
    csv_fires = load_csv(DATA_DIR / "fire_nrt.csv")
    count_by_date(csv_fires)
    return


if __name__ == "__main__":
    app.run()
