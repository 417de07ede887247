import pytest

from tests.helpers import ManualScheduler, ScriptedTransport


@pytest.fixture()
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def transport() -> ScriptedTransport:
    return ScriptedTransport()


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()
