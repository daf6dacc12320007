import dataclasses

import requests

from sinceonearth import app as app_module
from sinceonearth.config import ReferenceDataConfig, config


def _config_with_airports_path(path):
    return dataclasses.replace(
        config,
        reference=ReferenceDataConfig(airports_path=str(path), airports_url='https://example.test/airports.dat'),
    )


def test_missing_airport_file_is_downloaded(tmp_path, monkeypatch):
    target = tmp_path / 'airports.dat'
    downloads = []
    monkeypatch.setattr(app_module, 'config', _config_with_airports_path(target))
    monkeypatch.setattr(app_module, 'fetch_openflights', lambda path: downloads.append(path))

    app_module._ensure_airport_data()

    assert downloads == [target]


def test_download_failure_falls_back_to_bundled_table(tmp_path, monkeypatch):
    def failing_fetch(path):
        raise requests.ConnectionError('offline')

    monkeypatch.setattr(app_module, 'config', _config_with_airports_path(tmp_path / 'airports.dat'))
    monkeypatch.setattr(app_module, 'fetch_openflights', failing_fetch)

    app_module._ensure_airport_data()


def test_existing_airport_file_is_not_downloaded(tmp_path, monkeypatch):
    target = tmp_path / 'airports.dat'
    target.write_text('', encoding='utf-8')
    downloads = []
    monkeypatch.setattr(app_module, 'config', _config_with_airports_path(target))
    monkeypatch.setattr(app_module, 'fetch_openflights', lambda path: downloads.append(path))

    app_module._ensure_airport_data()

    assert downloads == []


def test_method_not_allowed_is_json(client):
    response = client.put('/health')

    assert response.status_code == 405
    assert response.get_json() == {'error': 'Method not allowed'}
