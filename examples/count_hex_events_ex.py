"""
-----------------------------------
Counting hail events per hexagon
-----------------------------------

Use 'data_processing.count_events.count_events'.

A single hail storm is seen by the radar many times: every volume scan of every radar covering it produces a hail
signature. Counting signatures would therefore mostly count how long storms last and how many radars overlap. Instead
we lay a grid of about 2,500 hexagons over a state and count *events* in each hexagon: the signatures in a hexagon are
sorted by time, and a new event starts once more than three hours have added up since the last event started (see
'data_processing.eventise_data.number_events' for the exact rule).

The steps are:

1. load the hail csv files downloaded in 'download_data_ex.py',
2. load the state boundary and build the hexagon grid once,
3. count events per hexagon for all stations, and again for NEXRAD stations only, reusing the same grid.

Binning millions of reports into hexagons is the slow step, so it is split into chunks that are worked on by a pool of
'cv.n_workers' processes. The pool is opened in a 'with' block so it is shut down even if a chunk fails, in which case
the whole count fails.

The gap threshold ('event_time_window'), number of hexagons ('n_hex_cells'), chunk size and pool size can be changed in
'constants_and_variables.py'.
"""

import logging
import os
from concurrent.futures import ProcessPoolExecutor
import constants_and_variables as cv
from data_processing.load_observations import load_obs_dir
from data_processing.load_region import load_region
from data_processing.hex_grid import make_hex_grid
from data_processing.stations import load_stations, join_stations, station_ids, station_filter
from data_processing.count_events import count_events, hex_counts_frame

logging.basicConfig(level=cv.log_level, format='%(asctime)s %(levelname)s %(message)s')

if __name__ == '__main__':
    state = 'Texas'

    observations = load_obs_dir(cv.hail_dir)
    stations = load_stations(os.path.join(cv.stations_dir, 'nexrad-stations.txt'))
    observations = join_stations(observations, stations)

    region = load_region(os.path.join(cv.shapefile_dir, 'cb_2017_us_state_20m', 'cb_2017_us_state_20m.shp'), state)
    tiling = make_hex_grid(region, n_cells=cv.n_hex_cells)

    with ProcessPoolExecutor(max_workers=cv.n_workers) as pool:
        all_counts = count_events(observations, tiling, region, executor=pool)
        nexrad_counts = count_events(observations, tiling, region, executor=pool,
                                     predicate=station_filter(station_ids(stations, 'NEXRAD')))

    print('Number of events, all stations: ', all_counts.sum())
    print('Number of events, NEXRAD only: ', nexrad_counts.sum())

    hex_counts_frame(tiling, all_counts).to_file('hex_events_{}.geojson'.format(state.lower()), driver='GeoJSON')
    hex_counts_frame(tiling, nexrad_counts).to_file('hex_events_{}_nexrad.geojson'.format(state.lower()),
                                                    driver='GeoJSON')
