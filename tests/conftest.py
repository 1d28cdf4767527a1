import pytest

from .fakes import FakeStore, debug_payload


@pytest.fixture
def three_key_store():
    return FakeStore(
        {
            "a1:x": ("string", -1, debug_payload(100, 5)),
            "a2:x": ("string", 60, debug_payload(200, 10)),
            "b:y": ("list", -1, debug_payload(50, 0)),
        }
    )
