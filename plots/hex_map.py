import os
import folium
import geopandas as gpd
import matplotlib.pyplot as plt
from matplotlib.colors import Normalize
import seaborn as sns
# local imports
from data_processing.hex_grid import region_geometry


def _outline(region):
    return gpd.GeoSeries([region_geometry(region)], crs='EPSG:4326')


def plot_hex_events(hex_frame, region=None, title='', column='events', cmap='YlOrRd', vmax=None,
                    fn='hex_events.png', destination_dir=''):
    fig, ax = plt.subplots(figsize=(10, 8))
    hex_frame.plot(column=column, cmap=cmap, vmin=0, vmax=vmax, linewidth=0.1, edgecolor='grey', legend=True,
                   legend_kwds={'label': 'Hail events', 'shrink': 0.6}, ax=ax)
    if region is not None:
        _outline(region).boundary.plot(ax=ax, color='black', linewidth=0.8)

    ax.set_title(title)
    ax.set_xlabel('Longitude')
    ax.set_ylabel('Latitude')
    path = os.path.join(destination_dir, fn)
    fig.savefig(path, bbox_inches='tight')
    plt.close(fig)
    return path


def plot_hex_comparison(hex_frames, region=None, column='events', cmap='YlOrRd', fn='hex_events_comparison.png',
                        destination_dir=''):
    """Side by side maps of several event counts, e.g. {'All stations': ..., 'NEXRAD': ...}.

    All panels share one colour scale so that they can be compared by eye.
    """
    vmax = max(max(int(f[column].max()) if len(f) else 0 for f in hex_frames.values()), 1)
    fig, axes = plt.subplots(1, len(hex_frames), figsize=(8 * len(hex_frames), 7), squeeze=False)

    for ax, (title, hex_frame) in zip(axes[0], hex_frames.items()):
        hex_frame.plot(column=column, cmap=cmap, vmin=0, vmax=vmax, linewidth=0.1, edgecolor='grey', ax=ax)
        if region is not None:
            _outline(region).boundary.plot(ax=ax, color='black', linewidth=0.8)
        ax.set_title(title)
        ax.set_axis_off()

    sm = plt.cm.ScalarMappable(cmap=cmap, norm=Normalize(vmin=0, vmax=vmax))
    fig.colorbar(sm, ax=list(axes[0]), shrink=0.6, label='Hail events')
    path = os.path.join(destination_dir, fn)
    fig.savefig(path, bbox_inches='tight')
    plt.close(fig)
    return path


def plot_monthly_observations(observations, hue=None, fn='monthly_observations.png', destination_dir=''):
    data = observations.assign(Month=observations['Time'].dt.month)
    fig, ax = plt.subplots(figsize=(10, 6))
    sns.countplot(data=data, x='Month', hue=hue, order=range(1, 13), ax=ax)
    ax.set_ylabel('Hail reports')
    path = os.path.join(destination_dir, fn)
    fig.savefig(path, bbox_inches='tight')
    plt.close(fig)
    return path


def folium_hex_map(hex_frame, column='events', fill_color='YlOrRd', zoom_start=6, fn='hex_events.html',
                   destination_dir=''):
    bounds = hex_frame.total_bounds
    m = folium.Map(location=[(bounds[1] + bounds[3]) / 2, (bounds[0] + bounds[2]) / 2], zoom_start=zoom_start,
                   tiles='cartodbpositron')

    hex_frame = hex_frame[['hex_id', column, 'geometry']].to_crs(epsg=4326)
    folium.Choropleth(
        geo_data=hex_frame,
        data=hex_frame,
        columns=['hex_id', column],
        key_on='feature.properties.hex_id',
        fill_color=fill_color,
        fill_opacity=0.6,
        line_opacity=0.2,
        legend_name='Hail events',
    ).add_to(m)
    folium.GeoJson(
        hex_frame,
        style_function=lambda feature: {'fillOpacity': 0, 'weight': 0},
        tooltip=folium.GeoJsonTooltip(fields=['hex_id', column], aliases=['Hexagon', 'Hail events']),
    ).add_to(m)

    path = os.path.join(destination_dir, fn)
    m.save(path)
    return path
