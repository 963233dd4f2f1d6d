import pytest

from lucky_casino.core.config import CasinoConfig
from lucky_casino.core.persist import ManualScheduler, MemoryStorage
from lucky_casino.core.rng import RandomSource
from lucky_casino.core.session import CasinoSession

from helpers import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def session(storage, scheduler, clock):
    return CasinoSession(CasinoConfig(), storage=storage, scheduler=scheduler, rng=RandomSource(seed=7), clock=clock)
