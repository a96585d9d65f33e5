import logging
import geopandas as gpd
# local imports
from data_processing.errors import ConfigurationError

logger = logging.getLogger(__name__)


def load_region(shapefile_path, state, column='NAME'):
    gdf = gpd.read_file(shapefile_path)
    if column not in gdf.columns:
        raise ConfigurationError("Column '{}' not found in '{}'".format(column, shapefile_path))

    region = gdf[gdf[column].astype(str).str.upper() == state.upper()]
    if region.empty:
        raise ConfigurationError("No shape with {} == '{}' in '{}'".format(column, state, shapefile_path))

    region = region.to_crs(epsg=4326).reset_index(drop=True)
    logger.info('Loaded region %s (%d shapes) from %s', state, len(region), shapefile_path)
    return region
