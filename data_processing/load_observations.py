import glob
import logging
import os
import numpy as np
import pandas as pd
# local imports
import constants_and_variables as cv
from data_processing.errors import ConfigurationError

logger = logging.getLogger(__name__)

swdi_columns = cv.swdi_columns
missing_value = cv.missing_value
required_columns = ['Time', 'Longitude', 'Latitude', 'Station']
numeric_columns = ['Longitude', 'Latitude', 'Range', 'Azimuth', 'Severe Probability', 'Probability', 'Max Size']


def to_seconds(times):
    # whole seconds since the Unix epoch, so event gaps are plain integer arithmetic
    times = pd.Series(pd.to_datetime(times, utc=True))
    return ((times - pd.Timestamp(0, tz='UTC')) // pd.Timedelta(seconds=1)).astype('int64')


def load_obs(observations_path, dt_format=cv.swdi_time_format):
    """Read one SWDI hail csv (plain or gzipped) into a frame of valid reports.

    Rows with a missing time, location or station, or with coordinates outside of
    [-180, 180] x [-90, 90], are dropped. The input row order is kept.
    """
    data = pd.read_csv(observations_path, dtype=str)
    # SWDI writes its header as a comment line, '#ZTIME,LON,LAT,...'
    data.columns = [c.lstrip('#').strip() for c in data.columns]
    data = data.rename(columns=swdi_columns)

    missing = [c for c in required_columns if c not in data.columns]
    if missing:
        raise ConfigurationError('{} is missing columns {}'.format(observations_path, missing))

    n_rows = len(data)
    # the missing-value sentinel never survives as a coordinate
    for column in numeric_columns:
        if column in data.columns:
            data[column] = pd.to_numeric(data[column], errors='coerce').replace(missing_value, np.nan)
    data['Time'] = pd.to_datetime(data['Time'].str.strip(), format=dt_format, utc=True, errors='coerce')
    data['Station'] = data['Station'].str.strip()
    data = data.dropna(subset=required_columns)
    data = data[(data['Longitude'].abs() <= 180) & (data['Latitude'].abs() <= 90)]
    data = data.reset_index(drop=True)
    data['Seconds'] = to_seconds(data['Time'])

    logger.info('Loaded %d of %d hail reports from %s', len(data), n_rows, observations_path)
    return data


def load_obs_dir(directory, pattern='hail-*.csv*', dt_format=cv.swdi_time_format):
    files = sorted(glob.glob(os.path.join(directory, pattern)))
    # keep the extracted csv when the gzipped original sits next to it
    files = [f for f in files if not (f.endswith('.gz') and f[:-3] in files)]
    if not files:
        raise ConfigurationError("No files matching '{}' in '{}'".format(pattern, directory))

    frames = [load_obs(f, dt_format=dt_format) for f in files]
    data = pd.concat(frames, ignore_index=True)
    logger.info('Loaded %d hail reports from %d files', len(data), len(files))
    return data
