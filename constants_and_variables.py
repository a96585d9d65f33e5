event_time_window = 3 * 60 * 60 # amount of time in seconds between reports to be considered a new event
n_hex_cells = 2500 # approximate number of hexagons laid over the bounding box of the region
touches_counts_as_contains = True # a report on the edge of a hexagon belongs to that hexagon

# reports are binned in chunks, each chunk can be sent to a separate worker
chunk_size = 100000
n_workers = 4

log_level = 'INFO'

# SWDI radar-detected hail signatures
swdi_url = 'https://www1.ncdc.noaa.gov/pub/data/swdi/database-csv/v2'
swdi_hail_pattern = '^hail-[0-9]'
swdi_time_format = '%Y%m%d%H%M%S'
missing_value = -999 # SWDI marks missing numeric fields with this value

swdi_columns = {
    'ZTIME': 'Time',
    'LON': 'Longitude',
    'LAT': 'Latitude',
    'WSR_ID': 'Station',
    'CELL_ID': 'Cell ID',
    'RANGE': 'Range',
    'AZIMUTH': 'Azimuth',
    'SEVPROB': 'Severe Probability',
    'PROB': 'Probability',
    'MAXSIZE': 'Max Size',
}

# census cartographic boundaries, 1:20,000,000
shapefile_url = 'http://www2.census.gov/geo/tiger/GENZ2017/shp/cb_2017_us_state_20m.zip'

# NEXRAD and TDWR station list from HOMR
stations_url = 'https://www.ncei.noaa.gov/access/homr/file/nexrad-stations.txt'
station_types = ['NEXRAD', 'TDWR']

# local layout of downloaded data
hail_dir = 'data/nexrad/hail/csv'
shapefile_dir = 'data/shapefiles'
stations_dir = 'data/stations'
