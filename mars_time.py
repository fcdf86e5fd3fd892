from dataclasses import dataclass
from datetime import datetime, timezone
import math
from typing import Optional

from rovers import ROVER_LOCATIONS

# --- CORE ASTRONOMICAL CONSTANTS ---
# Mean Sol length in Earth seconds (24h 37m 22.66s)
SOL_DURATION_SECONDS = 88775.244147
# MSD offset at the Mars24 epoch
MSD_EPOCH_OFFSET = 44796.0
# Earth days per Sol conversion factor
EARTH_TO_MARS_DAY_RATIO = 1.027491252
# Julian Date (JD) of the J2000 Epoch (January 1, 2000, 12:00:00 UTC)
J2000_EPOCH = 2451545.0
# Mars orbital eccentricity
ORBITAL_ECCENTRICITY = 0.09340
# Mars mean motion (degrees per sol)
MEAN_MOTION = 0.524021

SECONDS_PER_DAY = 86400


@dataclass(frozen=True)
class MarsTimeSnapshot:
    """One reading of every Mars clock, computed for a single Earth instant."""

    msd: float
    mtc: str
    curiosity_ltst: str
    perseverance_ltst: str
    curiosity_sol: int
    perseverance_sol: int
    earth_time: str

    def as_dict(self) -> dict:
        return {
            "msd": self.msd,
            "mtc": self.mtc,
            "curiosityLTST": self.curiosity_ltst,
            "perseveranceLTST": self.perseverance_ltst,
            "curiositySol": self.curiosity_sol,
            "perseveranceSol": self.perseverance_sol,
            "earthTime": self.earth_time,
        }


# ----------------------------
# 1) angle helpers
# ----------------------------
def degrees_to_radians(degrees: float) -> float:
    return degrees * (math.pi / 180)


def radians_to_degrees(radians: float) -> float:
    return radians * (180 / math.pi)


def _as_utc(instant: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already."""
    if instant.tzinfo is None or instant.tzinfo.utcoffset(instant) is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def parse_instant(value: str) -> datetime:
    """
    ISO-8601 text ("Z" suffix allowed) → aware UTC datetime.
    Text without an offset is read as UTC.

    Raises:
        ValueError: not a time, or outside datetime's range once in UTC.
    """
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    try:
        return _as_utc(parsed)
    except OverflowError as exc:
        raise ValueError(f"time out of range in UTC: {value!r}") from exc


# ----------------------------
# 2) UTC → JD → MSD
# ----------------------------
def date_to_julian(instant: datetime) -> float:
    """
    UTC datetime → Julian Date, using the proleptic Gregorian
    Julian Day Number formula.
    - 2000-01-01 12:00:00 UTC is JD 2451545.0 (J2000.0)
    - 1970-01-01 00:00:00 UTC is JD 2440587.5
    """
    utc = _as_utc(instant)

    a = (14 - utc.month) // 12
    y = utc.year + 4800 - a
    m = utc.month + 12 * a - 3

    jdn = (
        utc.day
        + (153 * m + 2) // 5
        + 365 * y
        + y // 4
        - y // 100
        + y // 400
        - 32045
    )

    seconds = utc.second + utc.microsecond / 1_000_000
    frac_day = (utc.hour + utc.minute / 60 + seconds / 3600) / 24

    return jdn + frac_day - 0.5


def earth_to_msd(instant: datetime) -> float:
    """
    Converts an Earth instant to a Mars Sol Date (MSD).

    One Earth day moves the MSD forward by 1 / EARTH_TO_MARS_DAY_RATIO
    (about 0.97324), not by a whole sol.
    """
    delta_j2000 = date_to_julian(instant) - J2000_EPOCH
    return (delta_j2000 - 4.5) / EARTH_TO_MARS_DAY_RATIO + MSD_EPOCH_OFFSET


# ----------------------------
# 3) Mars orbit / solar position terms (Mars24 B-1 to B-5)
# ----------------------------
def _mars_mean_anomaly(msd: float) -> float:
    """B-1: Mars mean anomaly M (degrees)"""
    return (19.387 + 0.52402075 * msd) % 360


def _fiction_mean_sun(msd: float) -> float:
    """B-2: Fictitious mean sun alpha_FMS (degrees)"""
    return (270.3863 + 0.5240384 * msd) % 360


def _pbs_term(msd: float) -> float:
    """B-3: Perturbers term PBS (degrees)"""
    s = 0.0
    for amplitude, phase in ((0.0071, 25.37), (0.0057, 195.8), (0.0039, 53.5)):
        s += amplitude * math.cos(
            degrees_to_radians((0.985626 * msd + phase) % 360)
        )
    return s


def _equation_of_center(msd: float) -> float:
    """B-4: Equation of center nu - M (degrees), perturbers included"""
    m = _mars_mean_anomaly(msd)
    return (
        10.691 * math.sin(degrees_to_radians(m))
        + 0.623 * math.sin(degrees_to_radians(2 * m))
        + 0.05 * math.sin(degrees_to_radians(3 * m))
        + 0.005 * math.sin(degrees_to_radians(4 * m))
        + 0.0005 * math.sin(degrees_to_radians(5 * m))
        + _pbs_term(msd)
    )


def get_mars_ls(msd: float) -> float:
    """B-5: Mars solar longitude Ls (degrees, 0-360)"""
    ls = (_fiction_mean_sun(msd) + _equation_of_center(msd)) % 360
    # a tiny negative sum folds to exactly 360.0
    return ls if ls < 360 else 0.0


# ----------------------------
# 4) Equation of time, MTC and LTST
# ----------------------------
def get_equation_of_time(msd: float) -> float:
    """
    C-1: Equation of time (hours), the offset from mean to true solar time.

    Every term is in degrees: the Ls harmonics minus the equation of
    center, then 15 degrees per hour.
    """
    ls = degrees_to_radians(get_mars_ls(msd))
    eot_degrees = (
        2.861 * math.sin(2 * ls)
        - 0.071 * math.sin(4 * ls)
        + 0.002 * math.sin(6 * ls)
        - _equation_of_center(msd)
    )
    return eot_degrees / 15.0


def get_mtc(instant: datetime) -> str:
    """C-2: Coordinated Mars Time, mean solar time at the Airy-0 meridian."""
    mtc_decimal = (24 * earth_to_msd(instant)) % 24
    return decimal_time_to_hms(mtc_decimal, wrap=True)


def get_ltst(instant: datetime, longitude: float) -> str:
    """
    Local True Solar Time at a Mars longitude (degrees, either sign).
    LTST = MTC + longitude / 15 + EOT, folded into 0-24 hours.
    """
    msd = earth_to_msd(instant)
    eot = get_equation_of_time(msd)

    # % with a positive modulus is never negative, west longitudes included
    ltst = (24 * msd + longitude / 15.0 + eot) % 24
    return decimal_time_to_hms(ltst, wrap=True)


# ----------------------------
# 5) Mission sols
# ----------------------------
def get_mission_sol(landing_date: datetime, current_date: datetime) -> int:
    """Whole sols elapsed since landing; sol 0 is the landing sol."""
    return math.floor(earth_to_msd(current_date) - earth_to_msd(landing_date))


# ----------------------------
# 6) Formatting
# ----------------------------
def decimal_time_to_hms(decimal_hours: float, wrap: bool = False) -> str:
    """
    Formats decimal hours as HH:MM:SS.

    Rounds once, to the nearest whole second (halves go up), so the
    fields never drift apart: 23.999722 gives "23:59:59". With wrap=True
    a reading that rounds up to a full day shows as "00:00:00".
    """
    total_seconds = math.floor(decimal_hours * 3600 + 0.5)
    if wrap:
        total_seconds %= SECONDS_PER_DAY

    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60

    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_earth_time(instant: datetime) -> str:
    """UTC wall-clock time of an Earth instant, seconds truncated."""
    return _as_utc(instant).strftime("%H:%M:%S")


# ----------------------------
# 7) Everything at once
# ----------------------------
def calculate_mars_time(
    instant: Optional[datetime] = None,
    rover_longitudes: Optional[dict] = None,
    rovers=ROVER_LOCATIONS,
) -> MarsTimeSnapshot:
    """
    Computes every Mars clock for one Earth instant.

    Args:
        instant: Earth time to convert; the current UTC time when omitted.
        rover_longitudes: Optional longitude overrides keyed by
            "curiosity" and/or "perseverance".
        rovers: Rover reference data (landing dates and default longitudes).

    Returns:
        A MarsTimeSnapshot.
    """
    if instant is None:
        instant = datetime.now(timezone.utc)
    overrides = rover_longitudes or {}

    curiosity = rovers["curiosity"]
    perseverance = rovers["perseverance"]

    curiosity_longitude = overrides.get("curiosity")
    if curiosity_longitude is None:
        curiosity_longitude = curiosity.longitude
    perseverance_longitude = overrides.get("perseverance")
    if perseverance_longitude is None:
        perseverance_longitude = perseverance.longitude

    return MarsTimeSnapshot(
        msd=earth_to_msd(instant),
        mtc=get_mtc(instant),
        curiosity_ltst=get_ltst(instant, curiosity_longitude),
        perseverance_ltst=get_ltst(instant, perseverance_longitude),
        curiosity_sol=curiosity.landing_sol
        + get_mission_sol(curiosity.landing_date, instant),
        perseverance_sol=perseverance.landing_sol
        + get_mission_sol(perseverance.landing_date, instant),
        earth_time=format_earth_time(instant),
    )
