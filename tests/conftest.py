import os
import uuid
from pathlib import Path

import pytest

from now_env import store
from now_env.loader import Loader
from now_env.store import EnvironmentStore, MappingAccessor

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def restore_environment(monkeypatch):
    monkeypatch.delenv("NOW_REGION", raising=False)
    saved_environ = dict(os.environ)
    saved_process = dict(store.PROCESS_ENV)
    saved_server = dict(store.SERVER_ENV)
    yield
    os.environ.clear()
    os.environ.update(saved_environ)
    store.PROCESS_ENV.clear()
    store.PROCESS_ENV.update(saved_process)
    store.SERVER_ENV.clear()
    store.SERVER_ENV.update(saved_server)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def isolated_store() -> EnvironmentStore:
    return EnvironmentStore(process_env={}, server_env={}, raw=MappingAccessor({}))


@pytest.fixture
def loader_for(isolated_store):
    def build(values=None, immutable=False):
        loader = Loader(FIXTURES / "now-normal.json", immutable=False, store=isolated_store)
        for name, value in (values or {}).items():
            loader.set_environment_variable(name, value)
        return loader.set_immutable(immutable)

    return build


@pytest.fixture
def unique_name() -> str:
    return f"NOWENV_{uuid.uuid4().hex.upper()}"
