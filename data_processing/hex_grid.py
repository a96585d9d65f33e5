import logging
import math
import geopandas as gpd
import numpy as np
import shapely
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry
# local imports
import constants_and_variables as cv
from data_processing.errors import ConfigurationError

logger = logging.getLogger(__name__)

n_hex_cells = cv.n_hex_cells


def region_geometry(region):
    """Collapse a GeoDataFrame, GeoSeries or shapely geometry into one geometry in EPSG:4326."""
    if isinstance(region, BaseGeometry):
        # copied, so the caller's geometry is never prepared in place
        geom = shapely.from_wkb(shapely.to_wkb(region))
    elif region is None:
        raise ConfigurationError('No region given')
    else:
        if region.crs is not None:
            region = region.to_crs(epsg=4326)
        geom = region.union_all() if len(region) else Polygon()

    if geom is None or geom.is_empty:
        raise ConfigurationError('Region is empty')
    return geom


def hexagon(cx, cy, radius):
    # pointy-top: vertices at 30, 90, ..., 330 degrees
    angles = np.deg2rad(30 + 60 * np.arange(6))
    return Polygon(zip(cx + radius * np.cos(angles), cy + radius * np.sin(angles)))


def make_hex_grid(region, n_cells=n_hex_cells):
    """Lay a hexagonal grid over a region and keep the cells touching it.

    Hexagons are generated row by row (bottom to top, left to right, every other row
    shifted by half a hexagon) over the bounding box of the region's convex hull, with
    a size chosen so that about ``n_cells`` of them fill that box. Cells that do not
    intersect the hull, and then the region itself, are dropped. The survivors are
    numbered 1, 2, ... in the order they were generated, so the same region and
    ``n_cells`` always give the same ids.

    Returns a GeoDataFrame with columns ``hex_id`` and ``geometry`` in EPSG:4326.
    """
    if isinstance(n_cells, bool) or not isinstance(n_cells, (int, np.integer)) or n_cells <= 0:
        raise ConfigurationError('n_cells must be a positive integer, got {!r}'.format(n_cells))

    geom = region_geometry(region)
    hull = geom.convex_hull
    min_x, min_y, max_x, max_y = hull.bounds
    width = max_x - min_x
    height = max_y - min_y
    if width <= 0 or height <= 0:
        raise ConfigurationError('Region has no area to tile')

    # hexagon area is 3 * sqrt(3) / 2 * r ** 2
    radius = math.sqrt(2 * width * height / (3 * math.sqrt(3) * n_cells))
    dx = radius * math.sqrt(3)
    dy = radius * 1.5
    n_cols = int(math.ceil(width / dx)) + 1
    n_rows = int(math.ceil(height / dy)) + 1

    cells = []
    for r in range(n_rows):
        for c in range(n_cols):
            cx = min_x + c * dx + (dx / 2 if r % 2 else 0)
            cy = min_y + r * dy
            cells.append(hexagon(cx, cy, radius))
    cells = np.array(cells, dtype=object)

    shapely.prepare(hull)
    cells = cells[shapely.intersects(hull, cells)]
    shapely.prepare(geom)
    cells = cells[shapely.intersects(geom, cells)]
    if len(cells) == 0:
        raise ConfigurationError('No hexagon intersects the region')

    tiling = gpd.GeoDataFrame({'hex_id': np.arange(1, len(cells) + 1)}, geometry=list(cells), crs='EPSG:4326')
    logger.info('Built %d hexagons (radius %.4f deg) from a %d x %d lattice', len(tiling), radius, n_rows, n_cols)
    return tiling
