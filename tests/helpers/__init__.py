from .fake_server import FakeKintoServer

__all__ = [
    "FakeKintoServer",
]
