from datetime import datetime, timedelta, timezone

from lucky_casino.core.rng import RandomSource


class ScriptedSource(RandomSource):
    """Returns queued integers instead of random ones."""

    def __init__(self, values=()):
        super().__init__(seed=0)
        self.values = list(values)
        self.calls = 0

    def random_int(self, low, high):
        self.calls += 1
        value = self.values.pop(0)
        assert low <= value <= high
        return value


class FakeClock:
    def __init__(self, start=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)
