import logging
import re
import pandas as pd
# local imports
from data_processing.errors import ConfigurationError

logger = logging.getLogger(__name__)

station_columns = {
    'ICAO': 'ICAO',
    'NAME': 'Name',
    'ST': 'State',
    'LAT': 'Latitude',
    'LON': 'Longitude',
    'STNTYPE': 'Station Type',
}


def load_stations(stations_path):
    """Parse the HOMR ``nexrad-stations.txt`` fixed-width station list.

    The file has a header line followed by a line of dashes, one run of dashes per
    column. Column boundaries are read off the dashes, so the parser does not depend
    on the exact widths NCEI happens to use.
    """
    with open(stations_path) as f:
        header = f.readline().rstrip('\n')
        dashes = f.readline().rstrip('\n')

    colspecs = [m.span() for m in re.finditer(r'-+', dashes)]
    if not colspecs:
        raise ConfigurationError("'{}' has no dashed separator line under its header".format(stations_path))
    names = [header[start:end].strip() for start, end in colspecs]

    data = pd.read_fwf(stations_path, colspecs=colspecs, names=names, skiprows=2, dtype=str)
    missing = [c for c in ['ICAO', 'STNTYPE'] if c not in data.columns]
    if missing:
        raise ConfigurationError('{} is missing columns {}'.format(stations_path, missing))

    data = data[[c for c in station_columns if c in data.columns]].rename(columns=station_columns)
    data = data.apply(lambda column: column.str.strip())
    data['ICAO'] = data['ICAO'].str.upper()
    data['Station Type'] = data['Station Type'].str.upper()
    for column in ['Latitude', 'Longitude']:
        if column in data.columns:
            data[column] = pd.to_numeric(data[column], errors='coerce')
    data = data.dropna(subset=['ICAO']).reset_index(drop=True)

    logger.info('Loaded %d stations from %s', len(data), stations_path)
    return data


def station_lookup(stations):
    # full ICAO ids first; NEXRAD sites are also reported under their 3-letter id ('FWS' for 'KFWS')
    lookup = {}
    for icao, station_type in zip(stations['ICAO'], stations['Station Type']):
        if station_type == 'NEXRAD' and len(icao) == 4:
            lookup.setdefault(icao[1:], station_type)
    for icao, station_type in zip(stations['ICAO'], stations['Station Type']):
        lookup[icao] = station_type
    return lookup


def join_stations(observations, stations):
    lookup = station_lookup(stations)
    data = observations.assign(**{'Station Type': observations['Station'].str.upper().map(lookup)})

    unmatched = data['Station Type'].isna().sum()
    if unmatched:
        logger.warning('%d hail reports come from stations missing from the station list', unmatched)
    return data


def station_ids(stations, station_type):
    station_type = station_type.upper()
    return {k for k, v in station_lookup(stations).items() if v == station_type}


def station_filter(ids):
    ids = {i.upper() for i in ids}

    def predicate(observations):
        return observations['Station'].str.upper().isin(ids)

    return predicate
