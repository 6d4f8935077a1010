"""
FIRMS Detection Download Helper Module

Fetches active fire detections as CSV from NASA's FIRMS area API so the
tutorial's CSV path can start without a manual download.
"""

import io
import os
from pathlib import Path
from typing import Optional

import polars as pl
import requests
from dotenv import load_dotenv
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

# Load environment variables from .env file
load_dotenv()

BASE = "https://firms.modaps.eosdis.nasa.gov/api/area/csv"

# Satellite data sources accepted by the area API
SOURCES = [
    "VIIRS_SNPP_NRT",  # VIIRS instrument on Suomi NPP satellite
    "VIIRS_NOAA20_NRT",  # VIIRS instrument on NOAA-20 satellite
    "VIIRS_NOAA21_NRT",  # VIIRS instrument on NOAA-21 satellite
    "VIIRS_SNPP_SP",  # VIIRS standard processing (archive)
    "MODIS_NRT",  # MODIS instrument (lower resolution)
    "MODIS_SP",  # MODIS standard processing (archive)
    "LANDSAT_NRT",  # Landsat satellites (US/Canada only)
]

MAX_DAY_RANGE = 10  # API limit per request
TIMEOUT = (10, 60)  # 10s to connect, 60s to read response


def get_map_key(map_key: Optional[str] = None) -> str:
    """Return the FIRMS MAP key, falling back to the FIRMS_MAP_KEY variable."""
    key = map_key or os.getenv("FIRMS_MAP_KEY")
    if not key:
        raise ValueError(
            "FIRMS_MAP_KEY environment variable is required. Please copy .env-example to .env and configure your API key."
        )
    return key


def create_session() -> requests.Session:
    """Create a requests session with retry strategy."""
    session = requests.Session()

    retry_strategy = Retry(
        total=3,
        status_forcelist=[429, 500, 502, 503, 504],
        backoff_factor=1,  # Wait 1, 2, 4 seconds between retries
        raise_on_status=False,
    )

    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.headers.update(
        {
            "User-Agent": "FIRMS-Explorer/1.0",
            "Accept": "text/csv",
        }
    )

    return session


def build_area_url(
    map_key: str,
    source: str,
    area: str = "world",
    day_range: int = 1,
    date: Optional[str] = None,
) -> str:
    """
    Build a FIRMS area API URL.

    Args:
        map_key: FIRMS MAP key
        source: One of SOURCES
        area: "world" or a "west,south,east,north" bounding box
        day_range: Number of days to fetch (1-10)
        date: Optional start date (YYYY-MM-DD); defaults to the most recent days

    Returns:
        str: Request URL
    """
    if source not in SOURCES:
        raise ValueError(f"Unsupported source: {source}. Available sources: {SOURCES}")
    if not 1 <= day_range <= MAX_DAY_RANGE:
        raise ValueError(f"day_range must be between 1 and {MAX_DAY_RANGE}, got {day_range}")

    url = f"{BASE}/{map_key}/{source}/{area}/{day_range}"
    if date:
        url = f"{url}/{date}"
    return url


def fetch_area_csv(
    source: str = "VIIRS_SNPP_NRT",
    area: str = "world",
    day_range: int = 1,
    date: Optional[str] = None,
    session: Optional[requests.Session] = None,
    map_key: Optional[str] = None,
) -> pl.DataFrame:
    """
    Fetch fire detections for an area from the FIRMS API.

    Returns:
        pl.DataFrame: Raw FIRMS CSV columns; empty when the area had no detections

    Raises:
        ValueError: If no MAP key is configured
        requests.HTTPError: If the API answers with an error status
    """
    url = build_area_url(get_map_key(map_key), source, area, day_range, date)

    if session is None:
        session = create_session()

    print(f"Fetching {source} detections for area {area} ({day_range} day(s))...")
    r = session.get(url, timeout=TIMEOUT)
    r.raise_for_status()

    response_text = r.text
    if response_text.strip().count("\n") == 0:  # header only → no detections
        print(f"   {source}: 0 detections (no data)")
        return pl.DataFrame()

    df = pl.read_csv(io.StringIO(response_text))
    print(f"   {source}: {len(df)} detections")

    return df


def download_detections(output_path, **fetch_kwargs) -> Path:
    """
    Fetch detections and write them to a CSV file for the loaders.

    Args:
        output_path: Destination CSV path
        **fetch_kwargs: Passed to fetch_area_csv

    Returns:
        Path: The written CSV file
    """
    df = fetch_area_csv(**fetch_kwargs)
    if df.is_empty():
        raise ValueError("FIRMS returned no detections for the requested area and dates")

    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.write_csv(path)
    print(f"Saved {len(df)} detections to: {path}")

    return path
