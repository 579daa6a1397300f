import logging
from datetime import timedelta

from .models import (
    ALL_FLATS, LOCATION_ALL, LOCATIONS, SEARCH_LOCATIONS,
    DateAvailability,
)

logger = logging.getLogger(__name__)

DEFAULT_FLEXIBILITY_DAYS = 2


def get_flats_by_location(location, flats=ALL_FLATS):
    if location == LOCATION_ALL:
        return list(flats)
    if location not in LOCATIONS:
        raise ValueError(f"Unknown location: {location!r}")
    return [f for f in flats if f.location == location]


def get_data_by_location(dataset, location):
    return dataset.days_for(location)


def tag_flat_id(location, flat_id):
    return f"{location}-{flat_id}"


def resolve_flat(flat_key, location, flats=ALL_FLATS):
    """
    Looks up the Flat behind an id from a query result.

    With location "all" the ids are tagged ("kadri-101"), otherwise bare.
    Returns None when nothing matches.
    """
    if location == LOCATION_ALL:
        flat_location, sep, flat_id = flat_key.partition("-")
        if not sep:
            return None
    else:
        flat_location, flat_id = location, flat_key
    for flat in flats:
        if flat.location == flat_location and flat.id == flat_id:
            return flat
    return None


def _available_flat_ids_for_day(days_by_date, flats_in_location, date_str, guest_count):
    availability_data = days_by_date.get(date_str)
    if availability_data is None:
        # Outside the generated month: nothing is free
        return []
    available = []
    for flat in flats_in_location:
        flat_data = availability_data.flat_availability.get(flat.id)
        if flat_data is not None and flat_data.available and flat.capacity >= guest_count:
            available.append(flat.id)
    return available


def get_availability_for_date_range(dataset, location, target_date, guest_count,
                                    flexibility_days=DEFAULT_FLEXIBILITY_DAYS):
    """
    Returns one DateAvailability per day in
    [target_date - flexibility_days, target_date + flexibility_days], oldest first.
    Raises ValueError for a window that does not fit between date.min and date.max.

    A flat counts for a day when it is free on that day and fits guest_count.
    For location "all" both locations are evaluated separately and their ids
    tagged with the location, so "kadri-101" and "bejai-101" stay distinct.
    """
    if location not in SEARCH_LOCATIONS:
        raise ValueError(f"Unknown location: {location!r}")
    if flexibility_days < 0:
        raise ValueError(f"flexibility_days must not be negative, got {flexibility_days}")

    locations = LOCATIONS if location == LOCATION_ALL else (location,)
    lookups = []
    for loc in locations:
        days_by_date = {d.date: d for d in get_data_by_location(dataset, loc)}
        lookups.append((loc, days_by_date, get_flats_by_location(loc, dataset.flats)))

    try:
        window = [target_date + timedelta(days=offset)
                  for offset in range(-flexibility_days, flexibility_days + 1)]
    except OverflowError:
        raise ValueError(
            f"Window of ±{flexibility_days} days around {target_date.isoformat()} "
            f"leaves the supported calendar range") from None

    result = []
    for current_date in window:
        date_str = current_date.isoformat()
        available_flats = []
        for loc, days_by_date, flats_in_location in lookups:
            ids = _available_flat_ids_for_day(days_by_date, flats_in_location, date_str, guest_count)
            if location == LOCATION_ALL:
                ids = [tag_flat_id(loc, flat_id) for flat_id in ids]
            available_flats.extend(ids)
        result.append(DateAvailability(current_date, available_flats))
    return result


def collect_available_flat_ids(results):
    """Unique flat ids across all days, in order of first appearance."""
    seen = []
    for entry in sorted(results, key=lambda r: r.date):
        for flat_id in entry.available_flats:
            if flat_id not in seen:
                seen.append(flat_id)
    return seen


def has_availability(results):
    return bool(collect_available_flat_ids(results))


def summarize_availability(results, selected_date, location, flats=ALL_FLATS):
    sorted_results = sorted(results, key=lambda r: r.date)
    summaries = []
    for flat_key in collect_available_flat_ids(sorted_results):
        flat = resolve_flat(flat_key, location, flats)
        if flat is None:
            logger.warning(f"Flat '{flat_key}' from the results is not in the registry.")
            continue
        available_dates = [r.date for r in sorted_results if flat_key in r.available_flats]
        summaries.append({
            'key': flat_key,
            'id': flat.id,
            'name': flat.name,
            'location': flat.location,
            'capacity': flat.capacity,
            'available_dates': available_dates,
            'available_on_selected_date': selected_date in available_dates,
        })
    return summaries

