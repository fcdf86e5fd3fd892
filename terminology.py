"""
Plain English definitions for the Mars time and mission terms shown next
to the clocks.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TermDefinition:
    term: str
    definition: str
    category: str  # "time" or "mission"


MARS_TERMINOLOGY = {
    "coordinated mars time": TermDefinition(
        "Coordinated Mars Time",
        "A universal time standard for Mars, similar to UTC on Earth. "
        "All Mars missions use this as a reference time.",
        "time",
    ),
    "mtc": TermDefinition(
        "MTC",
        "Coordinated Mars Time - a universal time standard for Mars, "
        "similar to UTC on Earth.",
        "time",
    ),
    "ltst": TermDefinition(
        "LTST",
        "Local True Solar Time - the actual local time at a specific location "
        "on Mars based on the sun's position.",
        "time",
    ),
    "local true solar time": TermDefinition(
        "Local True Solar Time",
        "The actual local time at a specific location on Mars based on the "
        "sun's position, like local solar time on Earth.",
        "time",
    ),
    "sol": TermDefinition(
        "Sol",
        "A Mars day, which is about 24 hours and 37 minutes long. Each mission "
        "counts sols from their landing day.",
        "time",
    ),
    "mars sol date": TermDefinition(
        "Mars Sol Date",
        "A continuous count of Mars days since a reference date, used for "
        "precise timekeeping across all Mars missions.",
        "time",
    ),
    "msd": TermDefinition(
        "MSD",
        "Mars Sol Date - a continuous count of Mars days since a reference date.",
        "time",
    ),
    "utc": TermDefinition(
        "UTC",
        "Coordinated Universal Time - the primary time standard on Earth, used "
        "as a reference for all space missions.",
        "time",
    ),
    "equation of time": TermDefinition(
        "Equation of Time",
        "The difference between mean and true solar time, caused by the "
        "eccentricity and tilt of Mars' orbit.",
        "time",
    ),
    "solar longitude": TermDefinition(
        "Solar Longitude",
        "Mars' position in its orbit around the Sun in degrees (Ls). Ls 0 is "
        "the northern spring equinox.",
        "time",
    ),
    "mission sol": TermDefinition(
        "Mission Sol",
        "The number of sols since a rover landed. The landing day is sol 0.",
        "mission",
    ),
    "gale crater": TermDefinition(
        "Gale Crater",
        "A 154 km wide impact crater near the Martian equator where "
        "Curiosity landed in August 2012.",
        "mission",
    ),
    "jezero crater": TermDefinition(
        "Jezero Crater",
        "An ancient lake basin in the northern hemisphere of Mars where "
        "Perseverance landed in February 2021.",
        "mission",
    ),
}


def get_term_definition(term: str):
    """Returns the TermDefinition for a term, or None if unknown."""
    return MARS_TERMINOLOGY.get(term.strip().lower())


def get_terms_by_category(category: str) -> list:
    return [t for t in MARS_TERMINOLOGY.values() if t.category == category]


def search_terms(query: str) -> list:
    """Terms whose name or definition contains the query (case-insensitive)."""
    q = query.strip().lower()
    if not q:
        return []
    return [
        t
        for t in MARS_TERMINOLOGY.values()
        if q in t.term.lower() or q in t.definition.lower()
    ]
