import gzip
import logging
import os
import re
import shutil
import zipfile
import requests
# local imports
import constants_and_variables as cv

logger = logging.getLogger(__name__)

swdi_url = cv.swdi_url
swdi_hail_pattern = cv.swdi_hail_pattern
shapefile_url = cv.shapefile_url
stations_url = cv.stations_url


def hail_links(url=swdi_url, timeout=60):
    # file names of the yearly hail csv files listed on the SWDI index page
    r = requests.get(url, timeout=timeout)
    r.raise_for_status()
    hrefs = re.findall(r'href="([^"]+)"', r.text)
    links = [h for h in hrefs if re.search(swdi_hail_pattern, h)]
    return list(dict.fromkeys(links))


def download_file(url, destination, timeout=60):
    with requests.get(url, stream=True, timeout=timeout) as r:
        r.raise_for_status()
        with open(destination, 'wb') as f:
            for chunk in r.iter_content(chunk_size=1 << 20):
                f.write(chunk)
    logger.info('Downloaded %s to %s', url, destination)
    return destination


def gunzip(file_path):
    if not file_path.endswith('.gz'):
        return file_path
    new_file_path = file_path[:-3]
    # the csv only appears once it is complete; a truncated archive leaves nothing behind
    part_path = new_file_path + '.part'
    try:
        with gzip.open(file_path, 'rb') as f_in, open(part_path, 'wb') as f_out:
            shutil.copyfileobj(f_in, f_out)
    except Exception:
        if os.path.exists(part_path):
            os.remove(part_path)
        raise
    os.replace(part_path, new_file_path)
    return new_file_path


def download_hail_files(destination_dir=cv.hail_dir, url=swdi_url, years=None):
    """Download and extract the SWDI hail csv files.

    If ``years`` is given, only files whose name contains one of them are fetched.
    Files already extracted in ``destination_dir`` are not downloaded again.
    """
    os.makedirs(destination_dir, exist_ok=True)

    links = hail_links(url)
    if years is not None:
        years = [str(y) for y in years]
        links = [link for link in links if any(y in link for y in years)]

    files = []
    for link in links:
        file_path = os.path.join(destination_dir, link)
        extracted = file_path[:-3] if file_path.endswith('.gz') else file_path
        if os.path.exists(extracted):
            logger.info('Using existing %s', extracted)
            files.append(extracted)
            continue
        download_file('{}/{}'.format(url.rstrip('/'), link), file_path)
        files.append(gunzip(file_path))

    return files


def download_shapefile(destination_dir=cv.shapefile_dir, url=shapefile_url):
    os.makedirs(destination_dir, exist_ok=True)
    zip_path = os.path.join(destination_dir, os.path.basename(url))
    download_file(url, zip_path)

    # 'cb_2017_us_state_20m.zip' is extracted to 'cb_2017_us_state_20m/'
    extract_dir = os.path.splitext(zip_path)[0]
    with zipfile.ZipFile(zip_path) as z:
        z.extractall(extract_dir)
    return extract_dir


def download_stations(destination_dir=cv.stations_dir, url=stations_url):
    os.makedirs(destination_dir, exist_ok=True)
    return download_file(url, os.path.join(destination_dir, os.path.basename(url)))
