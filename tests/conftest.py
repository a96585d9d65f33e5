"""Shared test fixtures for the hail hexagon suite.

Reports are built as small pandas frames with the same columns the SWDI loader
produces, and grids are either hand-made squares (to control edges exactly) or
built by ``make_hex_grid`` over a simple box.
"""

import matplotlib

matplotlib.use('Agg')

import geopandas as gpd
import numpy as np
import pandas as pd
import pytest
from shapely.geometry import box

from data_processing.hex_grid import make_hex_grid


# factory helpers


def make_obs(seconds, lons=None, lats=None, stations=None):
    """Create a frame of hail reports; locations default to (0.5, 0.5)."""
    n = len(seconds)
    seconds = np.asarray(seconds, dtype=np.int64)
    return pd.DataFrame({
        'Time': pd.to_datetime(seconds, unit='s', utc=True),
        'Longitude': np.full(n, 0.5) if lons is None else np.asarray(lons, dtype=float),
        'Latitude': np.full(n, 0.5) if lats is None else np.asarray(lats, dtype=float),
        'Station': ['KFWS'] * n if stations is None else list(stations),
        'Seconds': seconds,
    })


def make_tiling(cells, hex_ids=None):
    """Create a grid from shapely polygons, numbered 1.. unless ids are given."""
    if hex_ids is None:
        hex_ids = range(1, len(cells) + 1)
    return gpd.GeoDataFrame({'hex_id': list(hex_ids)}, geometry=list(cells), crs='EPSG:4326')


# fixtures


@pytest.fixture
def two_cells():
    """Two unit squares sharing the edge x == 1."""
    return make_tiling([box(0, 0, 1, 1), box(1, 0, 2, 1)])


@pytest.fixture
def two_cell_region():
    return box(0, 0, 2, 1)


@pytest.fixture
def square_region():
    return gpd.GeoDataFrame({'NAME': ['Square']}, geometry=[box(-100, 30, -96, 34)], crs='EPSG:4326')


@pytest.fixture
def square_tiling(square_region):
    return make_hex_grid(square_region, n_cells=100)


@pytest.fixture
def scattered_obs(square_region):
    """A few hundred reports in and around the square region over two days."""
    rng = np.random.default_rng(42)
    n = 500
    lons = rng.uniform(-101, -95, n)
    lats = rng.uniform(29, 35, n)
    seconds = np.sort(rng.integers(1_400_000_000, 1_400_000_000 + 2 * 86400, n))
    stations = rng.choice(['KFWS', 'KDYX', 'TDFW'], n)
    return make_obs(seconds, lons, lats, stations)
