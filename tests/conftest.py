"""
Test bootstrap:
- Provide an in-memory Kinto server behind the client transport interface
- Provide clients bound to it
"""
import pytest

from helpers import FakeKintoServer
from kinto_client import BasicAuth, ClientConfig, KintoClient


SERVER_URL = "http://kinto.test/v1"


@pytest.fixture
def fake_server():
    """Empty fake server without default pagination."""
    return FakeKintoServer(SERVER_URL)


@pytest.fixture
def config():
    """Configuration with basic credentials."""
    return ClientConfig(server_url=SERVER_URL, auth=BasicAuth("a", "a"))


@pytest.fixture
def client(config, fake_server):
    """Client talking to the fake server."""
    return KintoClient(config, transport=fake_server)


@pytest.fixture
def bucket(client):
    """Handle on the (not yet created) ``food`` bucket."""
    return client.bucket("food")


@pytest.fixture
def collection(client):
    """Handle on the ``meat`` collection of an existing ``food`` bucket."""
    client.bucket("food").set()
    return client.bucket("food").collection("meat")


@pytest.fixture
def record(collection):
    """Handle on the ``entrecote`` record of an existing ``meat`` collection."""
    collection.set()
    return collection.bucket.collection("meat").record("entrecote")
