import random
from datetime import date, timedelta

import pytest

from apartment_finder.app import create_app
from apartment_finder.core.generator import build_dataset
from apartment_finder.core.models import (
    ALL_FLATS, LOCATIONS, WEEKDAY_NAMES,
    AvailabilityDataset, DayAvailability, FlatDayStatus,
)


class ScriptedRandom:
    """Stand-in rng: random() replays `draws` in a loop, randint() returns its upper bound."""

    def __init__(self, draws):
        self.draws = list(draws)
        self.calls = 0

    def random(self):
        value = self.draws[self.calls % len(self.draws)]
        self.calls += 1
        return value

    def randint(self, a, b):
        return b


def _sparse_month(free=None, flats=ALL_FLATS):
    """
    April 2025 where every flat is occupied except the ones listed in
    `free`, e.g. {'kadri': {'2025-04-15': ['101']}}.
    """
    free = free or {}
    by_location = {}
    for location in LOCATIONS:
        free_days = free.get(location, {})
        days = []
        current = date(2025, 4, 1)
        while current.month == 4:
            date_str = current.isoformat()
            statuses = {}
            for flat in flats:
                if flat.location != location:
                    continue
                if flat.id in free_days.get(date_str, []):
                    statuses[flat.id] = FlatDayStatus(available=True)
                else:
                    statuses[flat.id] = FlatDayStatus(False, 1, "Guest 1", 1000)
            days.append(DayAvailability(date_str, WEEKDAY_NAMES[current.weekday()], statuses))
            current += timedelta(days=1)
        by_location[location] = days
    return AvailabilityDataset(by_location, flats)


@pytest.fixture
def seeded_dataset():
    return build_dataset(random.Random(20250415))


@pytest.fixture
def sparse_dataset():
    return _sparse_month({
        'kadri': {
            '2025-04-13': ['102'],
            '2025-04-15': ['101', '201'],
            '2025-04-17': ['101'],
        },
        'bejai': {
            '2025-04-15': ['101', '202'],
        },
    })


@pytest.fixture
def client(sparse_dataset):
    app = create_app(dataset=sparse_dataset)
    app.config['TESTING'] = True
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def scripted_random():
    """Factory for ScriptedRandom instances."""
    return ScriptedRandom


@pytest.fixture
def make_dataset():
    """Factory for hand-built April 2025 datasets, see _sparse_month."""
    return _sparse_month


class _BrokenDataset:
    flats = ALL_FLATS

    def days_for(self, location):
        raise RuntimeError("dataset unavailable")


@pytest.fixture
def broken_client():
    app = create_app(dataset=_BrokenDataset())
    app.config['TESTING'] = True
    with app.test_client() as test_client:
        yield test_client
