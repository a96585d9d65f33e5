import logging
import numpy as np
import pandas as pd
# local imports
import constants_and_variables as cv
from data_processing.errors import ConfigurationError

logger = logging.getLogger(__name__)

event_time_window = cv.event_time_window


def number_events(seconds, boundary=event_time_window):
    """Number the events of one hexagon's reports, sorted by time.

    The first report opens event 1. Walking forward, the gap to the previous report is
    added to a running offset; once the offset passes ``boundary`` the report opens the
    next event and the offset goes back to zero. The offset is *not* reset between
    reports of the same event, so a long chain of closely spaced reports also opens a
    new event after ``boundary`` seconds in total, even if no single gap is that long.
    That may not be what a "time since the last event" rule intends, but it is kept
    as is so counts stay comparable with earlier runs.

    Args:
        seconds: report times as numbers of seconds, ascending.
        boundary: gap threshold in seconds.

    Returns:
        numpy array of event numbers starting at 1.
    """
    seconds = np.asarray(seconds)
    if boundary < 0:
        raise ConfigurationError('Event boundary must not be negative, got {}'.format(boundary))
    if seconds.ndim != 1:
        raise ConfigurationError('Expected a 1-d array of seconds, got shape {}'.format(seconds.shape))
    if len(seconds) == 0:
        return np.array([], dtype=np.int64)
    steps = np.diff(seconds)
    if np.any(steps < 0):
        i = int(np.flatnonzero(steps < 0)[0])
        raise ConfigurationError('Report times are not sorted: {} comes after {} at position {}'.format(
            seconds[i + 1], seconds[i], i + 1))

    event = 1  # initializing the event counter
    events = [event]  # initializing the list of event IDs
    offset = 0
    for i in range(len(seconds) - 1):
        offset += seconds[i + 1] - seconds[i]
        if offset > boundary:
            event += 1
            offset = 0
        events.append(event)

    return np.array(events, dtype=np.int64)


def eventise(binned, boundary=event_time_window):
    """Add an 'Event' column numbering the events within each hexagon.

    Reports of a hexagon are ordered by 'Seconds'; reports at the same second keep
    their input order.
    """
    missing = [c for c in ['hex_id', 'Seconds'] if c not in binned.columns]
    if missing:
        raise ConfigurationError('Binned reports are missing columns {}'.format(missing))

    frames = []
    for hex_id, group in binned.groupby('hex_id', sort=True):
        group = group.sort_values(by='Seconds', kind='mergesort')
        group = group.assign(Event=number_events(group['Seconds'].to_numpy(), boundary=boundary))
        frames.append(group)

    if not frames:
        return binned.assign(Event=pd.Series([], dtype=np.int64, index=binned.index))

    data = pd.concat(frames)
    logger.info('Grouped %d hail reports into %d events over %d hexagons', len(data),
                data.groupby('hex_id')['Event'].max().sum(), len(frames))
    return data
