import os
import sys
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ttdbazaar.app.factory import create_app
from ttdbazaar.app.config import TestConfig
from ttdbazaar.app.extensions import db
from ttdbazaar.app.cli import seed_catalog


@pytest.fixture()
def app():
    app = create_app(TestConfig)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


# same client, but with the sample catalogue loaded into the database
@pytest.fixture()
def seeded_client(app):
    seed_catalog()
    with app.test_client() as client:
        yield client


VENDOR = {
    "shop_name": "Govinda Crafts",
    "business_type": "Handicrafts",
    "description": "Brass and wooden handicrafts from Tirupati.",
    "phone": "9876543210",
    "email": "govinda@example.com",
    "street_address": "12 Car Street",
    "area": "Old Town",
    "city": "Tirupati",
    "state": "Andhra Pradesh",
    "postal_code": "517501",
}


@pytest.fixture()
def vendor_id(client):
    response = client.post("/api/vendors", json=VENDOR)
    assert response.status_code == 201
    return response.json["id"]
