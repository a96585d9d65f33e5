"""
------------------------------
Plotting hail events on a map
------------------------------

Use 'plots.hex_map'.

This example reads the hexagon counts written by 'count_hex_events_ex.py' and draws

* a static map of the events per hexagon for all stations,
* the all-stations and NEXRAD-only maps side by side, on one colour scale,
* the number of hail reports per month, split by station type,
* an interactive map that can be opened in a browser.

Figures are saved in the working directory unless 'destination_dir' is given.
"""

import logging
import os
import geopandas as gpd
import constants_and_variables as cv
from data_processing.load_observations import load_obs_dir
from data_processing.load_region import load_region
from data_processing.stations import load_stations, join_stations
from plots import hex_map

logging.basicConfig(level=cv.log_level, format='%(asctime)s %(levelname)s %(message)s')

state = 'Texas'
region = load_region(os.path.join(cv.shapefile_dir, 'cb_2017_us_state_20m', 'cb_2017_us_state_20m.shp'), state)

all_stations = gpd.read_file('hex_events_{}.geojson'.format(state.lower()))
nexrad = gpd.read_file('hex_events_{}_nexrad.geojson'.format(state.lower()))

print(hex_map.plot_hex_events(all_stations, region=region, title='Hail events in {}'.format(state)))
print(hex_map.plot_hex_comparison({'All stations': all_stations, 'NEXRAD': nexrad}, region=region))

observations = join_stations(load_obs_dir(cv.hail_dir), load_stations(os.path.join(cv.stations_dir, 'nexrad-stations.txt')))
print(hex_map.plot_monthly_observations(observations, hue='Station Type'))

print(hex_map.folium_hex_map(all_stations))
