import pytest

from bodbridge.models.domain import CallDefinition
from tests.fakes import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def coffee_order() -> bytes:
    return b'{"order":{"cart":[{"name":"Coffee","modified":[]}]},"cabinet":{"Location":"JJ0103"}}'


@pytest.fixture
def scenario_calls() -> list[CallDefinition]:
    return [CallDefinition(id=481, description="Coffee"), CallDefinition(id=12, description="Service")]
