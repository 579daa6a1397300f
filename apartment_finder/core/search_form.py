from datetime import datetime

from .models import LOCATION_ALL, SEARCH_LOCATIONS

MIN_GUESTS = 1
MAX_GUESTS = 10

# Keeps every search window well inside datetime.date's range
MIN_SEARCH_YEAR = 1900
MAX_SEARCH_YEAR = 2100


class SearchParams:
    __slots__ = ("location", "date", "guest_count")

    def __init__(self, location, date, guest_count):
        object.__setattr__(self, "location", location)
        object.__setattr__(self, "date", date)
        object.__setattr__(self, "guest_count", guest_count)

    def __setattr__(self, key, value):
        raise AttributeError("SearchParams is immutable")

    def __eq__(self, other):
        if not isinstance(other, SearchParams):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"<SearchParams {self.location} {self.date.isoformat()} ({self.guest_count} guests)>"

    def to_dict(self):
        return {
            "location": self.location,
            "date": self.date.isoformat(),
            "guest_count": self.guest_count,
        }


def _parse_guest_count(raw):
    if isinstance(raw, bool) or raw is None:
        raise ValueError("not a guest count")
    if isinstance(raw, int):
        return raw
    value = float(str(raw).strip())
    if not value.is_integer():
        raise ValueError(f"{raw!r} is not a whole number")
    return int(value)


def parse_search_form(data):
    """
    Validates raw search input (request.args, request.form or a JSON dict).

    Returns (SearchParams, {}) on success and (None, errors) otherwise, where
    errors maps field names to messages for the form.
    """
    errors = {}

    location = data.get('location')
    if location is None or location == "":
        location = LOCATION_ALL
    elif not isinstance(location, str) or location not in SEARCH_LOCATIONS:
        errors['location'] = "Please select a valid location."

    date_value = data.get('date')
    selected_date = None
    if date_value is None or str(date_value).strip() == "":
        errors['date'] = "Please select a date."
    else:
        try:
            selected_date = datetime.strptime(str(date_value).strip(), "%Y-%m-%d").date()
        except ValueError:
            errors['date'] = "Please enter a valid date."
        else:
            if not MIN_SEARCH_YEAR <= selected_date.year <= MAX_SEARCH_YEAR:
                errors['date'] = "Please enter a valid date."

    guest_count = None
    try:
        guest_count = _parse_guest_count(data.get('guest_count'))
    except (TypeError, ValueError, OverflowError):
        errors['guest_count'] = "Please enter the number of guests."
    else:
        if guest_count < MIN_GUESTS:
            errors['guest_count'] = "Must have at least 1 guest."
        elif guest_count > MAX_GUESTS:
            errors['guest_count'] = "Maximum 10 guests allowed."

    if errors:
        return None, errors
    return SearchParams(location, selected_date, guest_count), {}
