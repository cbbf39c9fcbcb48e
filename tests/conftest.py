import pytest

from bitgo import BitGoClient, Context
from fakes import BASE_URL, FakeSession


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(session: FakeSession) -> BitGoClient:
    return BitGoClient(base_url=BASE_URL, session=session)


@pytest.fixture
def ctx() -> Context:
    return Context.background()
