import argparse
import logging
from datetime import datetime, timezone
import curses

from mars_time import calculate_mars_time, parse_instant
from rovers import ROVER_LOCATIONS

logger = logging.getLogger(__name__)


def configure_logging(level="INFO") -> logging.Logger:
    """Attach a compact stderr handler to the root logger once."""
    root = logging.getLogger()
    if not root.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        root.addHandler(h)
    root.setLevel(level)
    return root


# ----------------------------
# 1) snapshot feed with last-known-good fallback
# ----------------------------
class MarsTimeFeed:
    """
    Polls calculate_mars_time and keeps the last good snapshot.

    A failed calculation is logged and the previous snapshot is returned
    instead, so a live display never goes blank on one bad tick.
    """

    def __init__(self, rover_longitudes=None, rovers=ROVER_LOCATIONS):
        self.rover_longitudes = rover_longitudes
        self.rovers = rovers
        self._snapshot = None

    @property
    def snapshot(self):
        return self._snapshot

    def refresh(self, instant=None):
        try:
            self._snapshot = calculate_mars_time(
                instant, self.rover_longitudes, self.rovers
            )
        except Exception:
            logger.exception("Mars time calculation failed, keeping last snapshot")
        return self._snapshot


# ----------------------------
# 2) screen content
# ----------------------------
def build_rows(snapshot, utc_now: datetime) -> list:
    """Text lines for one frame of the clock."""
    rows = [
        "==== Mars Time (Mars24) ====",
        f"UTC Time: {utc_now:%Y-%m-%d %H:%M:%S}",
        "",
    ]
    if snapshot is None:
        rows.append("Waiting for first Mars time calculation...")
        return rows

    rows.append(f"{'Mars Sol Date':20s} {snapshot.msd:>12.5f}")
    rows.append(f"{'Coordinated (MTC)':20s} {snapshot.mtc:>12s}")
    rows.append("")
    rows.append(f"{'Rover':20s} {'Sol':>6s} {'LTST':>10s}")
    rows.append("-" * 38)
    rows.append(
        f"{'Curiosity':20s} {snapshot.curiosity_sol:>6d} {snapshot.curiosity_ltst:>10s}"
    )
    rows.append(
        f"{'Perseverance':20s} {snapshot.perseverance_sol:>6d} "
        f"{snapshot.perseverance_ltst:>10s}"
    )
    return rows


# ----------------------------
# 3) real time (curses used)
# ----------------------------
def draw(stdscr, feed: MarsTimeFeed, interval_ms: int = 1000):
    # Hide cursor
    curses.curs_set(0)
    # Non-blocking input mode
    stdscr.nodelay(True)
    # Wait at most one refresh interval for a key press
    stdscr.timeout(interval_ms)

    while True:
        ch = stdscr.getch()
        if ch in (ord("q"), ord("Q")):
            break

        utc_now = datetime.now(timezone.utc)
        snapshot = feed.refresh(utc_now)
        stdscr.erase()

        rows = build_rows(snapshot, utc_now)
        for y, row in enumerate(rows):
            stdscr.addstr(y, 0, row)
        stdscr.addstr(len(rows) + 1, 0, "Updating... (press 'q' to quit)")
        stdscr.refresh()


def _parse_instant(value: str) -> datetime:
    try:
        return parse_instant(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO-8601 time: {value!r}")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Coordinated Mars Time and rover local solar time",
    )
    parser.add_argument(
        "--interval",
        type=int,
        default=1000,
        help="Refresh interval in milliseconds (default: 1000).",
    )
    parser.add_argument(
        "--at",
        type=_parse_instant,
        default=None,
        help="Print the Mars clocks for one ISO-8601 UTC time and exit.",
    )
    parser.add_argument("--curiosity", type=float, help="Curiosity longitude override.")
    parser.add_argument(
        "--perseverance", type=float, help="Perseverance longitude override."
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    args = parser.parse_args(argv)
    if args.interval <= 0:
        parser.error("--interval must be positive")
    return args


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_level)

    feed = MarsTimeFeed(
        rover_longitudes={"curiosity": args.curiosity, "perseverance": args.perseverance}
    )
    if args.at is not None:
        snapshot = feed.refresh(args.at)
        for row in build_rows(snapshot, args.at):
            print(row)
        return 0 if snapshot is not None else 1

    logger.debug("Starting live Mars clock, interval %d ms", args.interval)
    curses.wrapper(draw, feed, args.interval)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
