import logging
import numpy as np
# local imports
import constants_and_variables as cv
from data_processing.bin_data import bin_observations
from data_processing.eventise_data import eventise

logger = logging.getLogger(__name__)

event_time_window = cv.event_time_window
touches_counts_as_contains = cv.touches_counts_as_contains
chunk_size = cv.chunk_size


def count_events(observations, tiling, region, predicate=None, boundary=event_time_window,
                 touches=touches_counts_as_contains, executor=None, chunk_size=chunk_size):
    """Number of hail events in each hexagon of ``tiling``.

    Args:
        observations: frame of hail reports with 'Longitude', 'Latitude' and 'Seconds'.
        tiling: hexagon grid from ``data_processing.hex_grid.make_hex_grid``. It is only
            read, so one grid can serve several calls with different predicates.
        region: area the grid was built on; reports outside of it are dropped.
        predicate: optional function taking the reports frame and returning a boolean
            mask of the reports to keep, e.g. ``data_processing.stations.station_filter``.
        boundary: gap threshold in seconds between events.
        touches: whether a report on a hexagon edge belongs to that hexagon.
        executor: optional ``concurrent.futures`` executor for binning chunks.
        chunk_size: number of reports per binning chunk.

    Returns:
        Series named 'events' indexed by 'hex_id'. Hexagons without any report are
        absent rather than zero.
    """
    if predicate is not None:
        observations = observations[np.asarray(predicate(observations), dtype=bool)]

    binned = bin_observations(observations, tiling, region, touches=touches, executor=executor,
                              chunk_size=chunk_size)
    eventised = eventise(binned, boundary=boundary)

    counts = eventised.groupby('hex_id')['Event'].max().astype(np.int64).rename('events')
    counts.index = counts.index.astype(np.int64).rename('hex_id')
    logger.info('Counted %d hail events in %d of %d hexagons', counts.sum(), len(counts), len(tiling))
    return counts


def hex_counts_frame(tiling, counts):
    # hexagons with no events are shown as 0 on maps and in exports
    hex_frame = tiling.merge(counts.rename('events').reset_index(), on='hex_id', how='left')
    hex_frame['events'] = hex_frame['events'].fillna(0).astype(int)
    return hex_frame
