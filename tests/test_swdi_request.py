"""Tests for downloading SWDI hail files, the state shapefile and the station list."""

import gzip
import io
import os
import zipfile

import pytest
import requests

from swdi_request import swdi_request as sr

INDEX_PAGE = '''
<html><body>
<a href="?C=N;O=D">Name</a>
<a href="hail-2015.csv.gz">hail-2015.csv.gz</a>
<a href="hail-2016.csv.gz">hail-2016.csv.gz</a>
<a href="hail-2016.csv.gz">hail-2016.csv.gz</a>
<a href="meso-2016.csv.gz">meso-2016.csv.gz</a>
<a href="hail-README.txt">hail-README.txt</a>
</body></html>
'''


class FakeResponse:
    """Just enough of ``requests.Response`` for the download helpers."""

    def __init__(self, content=b'', status_code=200):
        self.content = content
        self.status_code = status_code

    @property
    def text(self):
        return self.content.decode()

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError('{} Error'.format(self.status_code))

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i:i + chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def gzipped(text):
    return gzip.compress(text.encode())


@pytest.fixture
def fake_get(monkeypatch):
    """Route requests.get to a dict of url to FakeResponse and record the urls asked for."""
    responses = {}
    calls = []

    def get(url, **kwargs):
        calls.append(url)
        return responses.get(url, FakeResponse(status_code=404))

    monkeypatch.setattr(sr.requests, 'get', get)
    get.responses = responses
    get.calls = calls
    return get


class TestHailLinks:
    def test_only_hail_files_kept_once(self, fake_get):
        fake_get.responses['http://swdi'] = FakeResponse(INDEX_PAGE.encode())
        assert sr.hail_links('http://swdi') == ['hail-2015.csv.gz', 'hail-2016.csv.gz']

    def test_http_error_raised(self, fake_get):
        with pytest.raises(requests.HTTPError):
            sr.hail_links('http://missing')


class TestDownloadHailFiles:
    def test_files_for_requested_years_downloaded_and_extracted(self, fake_get, tmp_path):
        fake_get.responses['http://swdi'] = FakeResponse(INDEX_PAGE.encode())
        fake_get.responses['http://swdi/hail-2016.csv.gz'] = FakeResponse(gzipped('#ZTIME,LON\n'))

        files = sr.download_hail_files(str(tmp_path), url='http://swdi', years=[2016])

        assert files == [os.path.join(str(tmp_path), 'hail-2016.csv')]
        with open(files[0]) as f:
            assert f.read() == '#ZTIME,LON\n'
        assert 'http://swdi/hail-2015.csv.gz' not in fake_get.calls

    def test_existing_files_not_downloaded_again(self, fake_get, tmp_path):
        fake_get.responses['http://swdi/'] = FakeResponse(INDEX_PAGE.encode())
        (tmp_path / 'hail-2015.csv').write_text('cached')
        (tmp_path / 'hail-2016.csv').write_text('cached')

        files = sr.download_hail_files(str(tmp_path), url='http://swdi/')

        assert len(files) == 2
        assert fake_get.calls == ['http://swdi/']

    def test_truncated_archive_leaves_no_csv_and_is_fetched_again(self, fake_get, tmp_path):
        text = '#ZTIME,LON\n' + ''.join('{},{}\n'.format(i, i * 7) for i in range(5000))
        complete = gzipped(text)
        link = 'http://swdi/hail-2016.csv.gz'
        fake_get.responses['http://swdi'] = FakeResponse(INDEX_PAGE.encode())
        fake_get.responses[link] = FakeResponse(complete[:len(complete) // 2])

        with pytest.raises(EOFError):
            sr.download_hail_files(str(tmp_path), url='http://swdi', years=[2016])
        assert not os.path.exists(tmp_path / 'hail-2016.csv')
        assert not os.path.exists(tmp_path / 'hail-2016.csv.part')

        fake_get.responses[link] = FakeResponse(complete)
        files = sr.download_hail_files(str(tmp_path), url='http://swdi', years=[2016])

        assert fake_get.calls.count(link) == 2
        with open(files[0]) as f:
            assert f.read() == text

    def test_failed_download_raises(self, fake_get, tmp_path):
        fake_get.responses['http://swdi'] = FakeResponse(INDEX_PAGE.encode())
        with pytest.raises(requests.HTTPError):
            sr.download_hail_files(str(tmp_path), url='http://swdi')


class TestDownloadShapefile:
    def test_zip_extracted_next_to_itself(self, fake_get, tmp_path):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, 'w') as z:
            z.writestr('cb_2017_us_state_20m.shp', b'shape')
            z.writestr('cb_2017_us_state_20m.dbf', b'table')
        url = 'http://census/cb_2017_us_state_20m.zip'
        fake_get.responses[url] = FakeResponse(buffer.getvalue())

        extract_dir = sr.download_shapefile(str(tmp_path), url=url)

        assert extract_dir == os.path.join(str(tmp_path), 'cb_2017_us_state_20m')
        assert sorted(os.listdir(extract_dir)) == ['cb_2017_us_state_20m.dbf', 'cb_2017_us_state_20m.shp']


class TestDownloadStations:
    def test_station_list_saved(self, fake_get, tmp_path):
        url = 'http://homr/nexrad-stations.txt'
        fake_get.responses[url] = FakeResponse(b'ICAO\n----\nKFWS\n')

        path = sr.download_stations(str(tmp_path / 'stations'), url=url)

        assert path == os.path.join(str(tmp_path / 'stations'), 'nexrad-stations.txt')
        with open(path) as f:
            assert f.read() == 'ICAO\n----\nKFWS\n'
