import pytest

from fakes import FakeIndex, FakeRedis


@pytest.fixture
def fake_index():
    return FakeIndex()


@pytest.fixture
def fake_redis():
    return FakeRedis()
