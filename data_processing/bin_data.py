import logging
from itertools import repeat
import numpy as np
import shapely
# local imports
import constants_and_variables as cv
from data_processing.errors import ConfigurationError
from data_processing.hex_grid import region_geometry

logger = logging.getLogger(__name__)

chunk_size = cv.chunk_size
touches_counts_as_contains = cv.touches_counts_as_contains

UNASSIGNED = 0


def assign_chunk(lons, lats, cells, cell_ids, region, touches=touches_counts_as_contains):
    """Hexagon id of every point in one chunk, ``UNASSIGNED`` for points outside of the grid.

    A point is first checked against the region. Inside it, the point goes to the first
    cell (in grid order) that intersects it, or that strictly contains it when
    ``touches`` is False.
    """
    points = shapely.points(np.asarray(lons, dtype=float), np.asarray(lats, dtype=float))
    hex_ids = np.full(len(points), UNASSIGNED, dtype=np.int64)
    if len(points) == 0:
        return hex_ids

    shapely.prepare(region)
    inside = np.flatnonzero(shapely.intersects(region, points))
    if len(inside) == 0:
        return hex_ids

    tree = shapely.STRtree(cells)
    # tree.query tests predicate(point, cell)
    point_idx, cell_idx = tree.query(points[inside], predicate='intersects' if touches else 'within')
    if len(point_idx) == 0:
        return hex_ids

    # lowest cell index per point, i.e. the first match in grid order
    order = np.lexsort((cell_idx, point_idx))
    point_idx = point_idx[order]
    cell_idx = cell_idx[order]
    first = np.unique(point_idx, return_index=True)[1]
    hex_ids[inside[point_idx[first]]] = np.asarray(cell_ids)[cell_idx[first]]
    return hex_ids


def assign_bins(lons, lats, tiling, region, touches=touches_counts_as_contains, executor=None, chunk_size=chunk_size):
    """Hexagon ids for arrays of longitudes and latitudes.

    The points are cut into chunks of ``chunk_size``. With no ``executor`` the chunks
    are worked through one after another; otherwise they are handed to
    ``executor.map`` (e.g. a ``concurrent.futures.ProcessPoolExecutor`` opened by the
    caller in a ``with`` block). Either way the chunk results are concatenated in
    input order, and an exception in any chunk is raised here with no partial result.
    """
    if tiling is None or len(tiling) == 0:
        raise ConfigurationError('Hexagon grid is empty')
    if chunk_size <= 0:
        raise ConfigurationError('chunk_size must be positive, got {}'.format(chunk_size))
    geom = region_geometry(region)

    lons = np.asarray(lons, dtype=float)
    lats = np.asarray(lats, dtype=float)
    if lons.shape != lats.shape:
        raise ConfigurationError('Got {} longitudes but {} latitudes'.format(len(lons), len(lats)))
    if len(lons) == 0:
        return np.array([], dtype=np.int64)

    cells = np.asarray(tiling.geometry.values, dtype=object)
    cell_ids = tiling['hex_id'].to_numpy()

    starts = range(0, len(lons), chunk_size)
    lon_chunks = [lons[s:s + chunk_size] for s in starts]
    lat_chunks = [lats[s:s + chunk_size] for s in starts]
    args = (lon_chunks, lat_chunks, repeat(cells), repeat(cell_ids), repeat(geom), repeat(touches))

    if executor is None:
        results = list(map(assign_chunk, *args))
    else:
        results = list(executor.map(assign_chunk, *args))

    return np.concatenate(results)


def bin_observations(observations, tiling, region, touches=touches_counts_as_contains, executor=None,
                     chunk_size=chunk_size):
    hex_ids = assign_bins(observations['Longitude'].to_numpy(), observations['Latitude'].to_numpy(), tiling, region,
                          touches=touches, executor=executor, chunk_size=chunk_size)

    binned = observations.assign(hex_id=hex_ids)
    binned = binned[binned['hex_id'] != UNASSIGNED]
    logger.info('Binned %d of %d hail reports into %d hexagons', len(binned), len(observations),
                binned['hex_id'].nunique())
    return binned
