import pytest

from sqlgate import ConnectionManager


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'gateway.db'}"


@pytest.fixture
def connections(database_url):
    manager = ConnectionManager.initialize(database_url, max_open=4, max_idle=2)
    yield manager
    manager.dispose()
