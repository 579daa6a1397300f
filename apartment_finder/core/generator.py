import calendar
import logging
import random
from datetime import date

from .models import (
    ALL_FLATS, LOCATIONS, WEEKDAY_NAMES,
    AvailabilityDataset, DayAvailability, FlatDayStatus,
)

logger = logging.getLogger(__name__)

DEMO_YEAR = 2025
DEMO_MONTH = 4

WEEKEND_DAYS = ("Fri", "Sat")
# A flat is free when the draw is above the threshold
WEEKEND_UNAVAILABLE_THRESHOLD = 0.7
WEEKDAY_UNAVAILABLE_THRESHOLD = 0.4

MIN_AMOUNT = 1000
MAX_AMOUNT = 2999


def _draw_flat_status(rng, flat, day_name):
    threshold = WEEKEND_UNAVAILABLE_THRESHOLD if day_name in WEEKEND_DAYS else WEEKDAY_UNAVAILABLE_THRESHOLD
    available = rng.random() > threshold
    if available:
        return FlatDayStatus(available=True)
    return FlatDayStatus(
        available=False,
        guest_count=rng.randint(1, flat.capacity),
        guest_name=f"Guest {rng.randint(0, 99)}",
        amount=rng.randint(MIN_AMOUNT, MAX_AMOUNT),
    )


def generate_month_data(location, rng=None, flats=ALL_FLATS, year=DEMO_YEAR, month=DEMO_MONTH):
    """
    Generates one month of availability for a single location.

    `rng` needs `random()` and `randint(a, b)`; a fresh unseeded
    `random.Random` is used when it is omitted.
    Returns a tuple with one DayAvailability per calendar day.
    """
    if location not in LOCATIONS:
        raise ValueError(f"Unknown location: {location!r}")
    if rng is None:
        rng = random.Random()

    flats_in_location = [f for f in flats if f.location == location]
    days_in_month = calendar.monthrange(year, month)[1]

    data = []
    for day in range(1, days_in_month + 1):
        current = date(year, month, day)
        day_name = WEEKDAY_NAMES[current.weekday()]
        flat_availability = {}
        for flat in flats_in_location:
            flat_availability[flat.id] = _draw_flat_status(rng, flat, day_name)
        data.append(DayAvailability(current.isoformat(), day_name, flat_availability))
    return tuple(data)


def build_dataset(rng=None, flats=ALL_FLATS, year=DEMO_YEAR, month=DEMO_MONTH):
    if rng is None:
        rng = random.Random()
    by_location = {}
    for location in LOCATIONS:
        by_location[location] = generate_month_data(location, rng, flats, year, month)
        free_slots = sum(
            1 for d in by_location[location] for s in d.flat_availability.values() if s.available
        )
        logger.info(f"Generated availability for '{location}': {len(by_location[location])} days, "
                    f"{free_slots} free flat-days.")
    return AvailabilityDataset(by_location, flats)
