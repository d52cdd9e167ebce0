import pytest

from tests.helpers import ItemsResource, RecordingResource, make_request


@pytest.fixture
def recording():
    return RecordingResource()


@pytest.fixture
def request_factory():
    return make_request


@pytest.fixture
def items():
    return ItemsResource()
