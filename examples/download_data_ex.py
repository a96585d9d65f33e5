"""
--------------------------
Downloading the input data
--------------------------

Use 'swdi_request.swdi_request'.

Three things are needed before hail events can be counted:

1. The radar-detected hail signatures from NOAA's Severe Weather Data Inventory (SWDI). These are published as one
   gzipped csv file per year at 'https://www1.ncdc.noaa.gov/pub/data/swdi/database-csv/v2' and are named
   'hail-YYYY.csv.gz'. 'download_hail_files' reads the index page, downloads every 'hail-*' file and extracts it
   into 'data/nexrad/hail/csv'. The full archive is several GB, so below we only take two years.

2. A state boundary. We use the census 1:20,000,000 cartographic boundary shapefile 'cb_2017_us_state_20m', which
   'download_shapefile' extracts into 'data/shapefiles/cb_2017_us_state_20m'.

3. The list of NEXRAD and TDWR radar stations, used to tell reports from the two networks apart. It is saved to
   'data/stations/nexrad-stations.txt'.

Files that were already extracted are not downloaded again. Paths and URLs can be changed in
'constants_and_variables.py'.
"""

import logging
import constants_and_variables as cv
from swdi_request import swdi_request as sr

logging.basicConfig(level=cv.log_level, format='%(asctime)s %(levelname)s %(message)s')

hail_files = sr.download_hail_files(years=[2016, 2017])
print('Hail files: ', hail_files)

shapefile_dir = sr.download_shapefile()
print('Shapefile extracted to: ', shapefile_dir)

stations_file = sr.download_stations()
print('Station list saved to: ', stations_file)
