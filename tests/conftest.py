import pytest

from models import GeoPoint

NEW_YORK = GeoPoint(lat=40.7128, lng=-74.0060)
TOKYO = GeoPoint(lat=35.6762, lng=139.6503)


@pytest.fixture
def new_york():
    return NEW_YORK


@pytest.fixture
def tokyo():
    return TOKYO
