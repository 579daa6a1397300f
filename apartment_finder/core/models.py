from types import MappingProxyType

LOCATION_KADRI = "kadri"
LOCATION_BEJAI = "bejai"
LOCATION_ALL = "all"
LOCATIONS = (LOCATION_KADRI, LOCATION_BEJAI)
SEARCH_LOCATIONS = (LOCATION_ALL,) + LOCATIONS

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class Flat:
    __slots__ = ("id", "name", "location", "capacity")

    def __init__(self, flat_id, name, location, capacity):
        if location not in LOCATIONS:
            raise ValueError(f"Unknown location: {location!r}")
        if capacity <= 0:
            raise ValueError(f"Capacity must be positive, got {capacity}")
        object.__setattr__(self, "id", flat_id)
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "location", location)
        object.__setattr__(self, "capacity", capacity)

    def __setattr__(self, key, value):
        raise AttributeError("Flat is immutable")

    def __eq__(self, other):
        if not isinstance(other, Flat):
            return NotImplemented
        return (self.id, self.location) == (other.id, other.location)

    def __hash__(self):
        return hash((self.id, self.location))

    def __repr__(self):
        return f"<Flat '{self.name}' (ID: {self.id}, Location: {self.location}, Capacity: {self.capacity})>"

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "capacity": self.capacity,
        }


# Kadri: 101, 102, 201, 202, 302
_KADRI_CAPACITIES = [("101", 3), ("102", 2), ("201", 4), ("202", 2), ("302", 3)]
# Bejai: same numbers, different capacities
_BEJAI_CAPACITIES = [("101", 2), ("102", 3), ("201", 4), ("202", 2), ("302", 3)]

ALL_FLATS = tuple(
    [Flat(flat_id, f"Flat {flat_id}", LOCATION_KADRI, cap) for flat_id, cap in _KADRI_CAPACITIES] +
    [Flat(flat_id, f"Flat {flat_id}", LOCATION_BEJAI, cap) for flat_id, cap in _BEJAI_CAPACITIES]
)


class FlatDayStatus:
    """Occupancy of one flat on one day.

    The guest fields are placeholders for display and are only set when the
    flat is not available.
    """

    __slots__ = ("available", "guest_count", "guest_name", "amount")

    def __init__(self, available, guest_count=0, guest_name=None, amount=None):
        object.__setattr__(self, "available", bool(available))
        object.__setattr__(self, "guest_count", guest_count)
        object.__setattr__(self, "guest_name", guest_name)
        object.__setattr__(self, "amount", amount)

    def __setattr__(self, key, value):
        raise AttributeError("FlatDayStatus is immutable")

    def __eq__(self, other):
        if not isinstance(other, FlatDayStatus):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        if self.available:
            return "<FlatDayStatus free>"
        return f"<FlatDayStatus occupied ({self.guest_count} guests, {self.guest_name})>"

    def to_dict(self):
        return {
            "available": self.available,
            "guest_count": self.guest_count,
            "guest_name": self.guest_name,
            "amount": self.amount,
        }


class DayAvailability:
    __slots__ = ("date", "day", "flat_availability")

    def __init__(self, date_str, day, flat_availability):
        object.__setattr__(self, "date", date_str)
        object.__setattr__(self, "day", day)
        object.__setattr__(self, "flat_availability", MappingProxyType(dict(flat_availability)))

    def __setattr__(self, key, value):
        raise AttributeError("DayAvailability is immutable")

    def __repr__(self):
        free = sum(1 for s in self.flat_availability.values() if s.available)
        return f"<DayAvailability {self.date} ({self.day}): {free}/{len(self.flat_availability)} free>"

    def to_dict(self):
        return {
            "date": self.date,
            "day": self.day,
            "flat_availability": {k: v.to_dict() for k, v in self.flat_availability.items()},
        }


class AvailabilityDataset:
    """Generated month of availability for every location.

    Built once and handed to the query functions; nothing mutates it afterwards.
    """

    __slots__ = ("flats", "_by_location")

    def __init__(self, by_location, flats=ALL_FLATS):
        object.__setattr__(self, "flats", tuple(flats))
        object.__setattr__(self, "_by_location", MappingProxyType(
            {loc: tuple(days) for loc, days in by_location.items()}
        ))

    def __setattr__(self, key, value):
        raise AttributeError("AvailabilityDataset is immutable")

    def __repr__(self):
        sizes = ", ".join(f"{loc}: {len(days)} days" for loc, days in self._by_location.items())
        return f"<AvailabilityDataset {sizes}>"

    @property
    def locations(self):
        return tuple(self._by_location.keys())

    def days_for(self, location):
        if location not in self._by_location:
            raise ValueError(f"Unknown location: {location!r}")
        return self._by_location[location]


class DateAvailability:
    __slots__ = ("date", "available_flats")

    def __init__(self, date, available_flats):
        object.__setattr__(self, "date", date)
        object.__setattr__(self, "available_flats", tuple(available_flats))

    def __setattr__(self, key, value):
        raise AttributeError("DateAvailability is immutable")

    def __eq__(self, other):
        if not isinstance(other, DateAvailability):
            return NotImplemented
        return self.date == other.date and self.available_flats == other.available_flats

    def __repr__(self):
        return f"<DateAvailability {self.date.isoformat()}: {list(self.available_flats)}>"

    @property
    def day(self):
        return WEEKDAY_NAMES[self.date.weekday()]

    def to_dict(self):
        return {
            "date": self.date.isoformat(),
            "day": self.day,
            "available_flats": list(self.available_flats),
        }
