import pytest

from app import app as flask_app
from places import load_places

PLACES_ROWS = """label,lat,lon
Raízes 1,-19.971,-43.963
Bloco A,-19.972,-43.964
Raízes 2,-19.9712,-43.9630
"""


@pytest.fixture
def places_csv(tmp_path):
    path = tmp_path / "places.csv"
    path.write_text(PLACES_ROWS, encoding="utf-8")
    return str(path)


@pytest.fixture
def gazetteer(places_csv):
    return load_places(places_csv, force=True)


@pytest.fixture
def client(places_csv):
    flask_app.config.update(TESTING=True, PLACES_CSV=places_csv)
    with flask_app.test_client() as c:
        yield c


class FakeLocation:
    def __init__(self, latitude, longitude):
        self.latitude = latitude
        self.longitude = longitude


class FakeGeolocator:
    """Stands in for geopy's Nominatim; records the queries it receives."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.queries = []

    def geocode(self, query, exactly_one=True):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def make_geolocator():
    return FakeGeolocator


@pytest.fixture
def make_location():
    return FakeLocation
