"""
Tests for the live clock layer: last-known-good feed, frame rows and CLI.
"""

import logging
from datetime import datetime, timezone

import pytest

import mars_clock
from mars_clock import MarsTimeFeed, build_rows, main, parse_args
from mars_time import calculate_mars_time

MID_2023 = datetime(2023, 7, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestMarsTimeFeed:
    """Last-known-good snapshot handling"""

    def test_refresh_stores_snapshot(self) -> None:
        feed = MarsTimeFeed()
        assert feed.snapshot is None
        snapshot = feed.refresh(MID_2023)
        assert snapshot == calculate_mars_time(MID_2023)
        assert feed.snapshot is snapshot

    def test_failure_keeps_previous_snapshot(self, monkeypatch, caplog) -> None:
        feed = MarsTimeFeed()
        good = feed.refresh(MID_2023)

        def broken(*args, **kwargs):
            raise OverflowError("date value out of range")

        monkeypatch.setattr(mars_clock, "calculate_mars_time", broken)
        with caplog.at_level(logging.ERROR, logger="mars_clock"):
            assert feed.refresh(MID_2023) is good

        assert feed.snapshot is good
        assert any("keeping last snapshot" in r.getMessage() for r in caplog.records)

    def test_failure_before_first_snapshot(self, monkeypatch) -> None:
        def broken(*args, **kwargs):
            raise ValueError("bad instant")

        monkeypatch.setattr(mars_clock, "calculate_mars_time", broken)
        assert MarsTimeFeed().refresh(MID_2023) is None

    def test_longitude_overrides_passed_through(self) -> None:
        feed = MarsTimeFeed(rover_longitudes={"curiosity": 0.0})
        snapshot = feed.refresh(MID_2023)
        assert snapshot == calculate_mars_time(MID_2023, {"curiosity": 0.0})


class TestBuildRows:
    """Frame text"""

    def test_waiting_frame(self) -> None:
        rows = build_rows(None, MID_2023)
        assert rows[1] == "UTC Time: 2023-07-01 12:00:00"
        assert rows[-1].startswith("Waiting")

    def test_full_frame(self) -> None:
        snapshot = calculate_mars_time(MID_2023)
        text = "\n".join(build_rows(snapshot, MID_2023))
        assert snapshot.mtc in text
        assert snapshot.curiosity_ltst in text
        assert snapshot.perseverance_ltst in text
        assert str(snapshot.curiosity_sol) in text
        assert str(snapshot.perseverance_sol) in text
        assert f"{snapshot.msd:.5f}" in text


class TestCli:
    """Command-line options"""

    def test_defaults(self) -> None:
        args = parse_args([])
        assert args.interval == 1000
        assert args.at is None
        assert args.log_level == "INFO"

    def test_at_accepts_zulu(self) -> None:
        args = parse_args(["--at", "2023-07-01T12:00:00Z"])
        assert args.at == MID_2023

    def test_rejects_bad_time(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["--at", "yesterday"])

    def test_rejects_non_positive_interval(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["--interval", "0"])

    def test_one_shot_print(self, capsys) -> None:
        assert main(["--at", "2023-07-01T12:00:00Z"]) == 0
        out = capsys.readouterr().out
        assert calculate_mars_time(MID_2023).mtc in out
        assert "Curiosity" in out

    def test_longitude_overrides_parsed(self) -> None:
        args = parse_args(["--curiosity", "-45", "--perseverance", "10.5"])
        assert args.curiosity == -45.0
        assert args.perseverance == 10.5

    def test_main_passes_longitude_overrides_to_feed(self, monkeypatch) -> None:
        created = []

        class RecordingFeed(MarsTimeFeed):
            def __init__(self, *args, **kwargs):
                super().__init__(*args, **kwargs)
                created.append(self)

        monkeypatch.setattr(mars_clock, "MarsTimeFeed", RecordingFeed)
        assert main(["--at", "2023-07-01T12:00:00Z", "--curiosity", "0"]) == 0

        (feed,) = created
        assert feed.rover_longitudes == {"curiosity": 0.0, "perseverance": None}
        assert feed.snapshot == calculate_mars_time(MID_2023, {"curiosity": 0.0})

    def test_one_shot_print_uses_override(self, capsys) -> None:
        main(["--at", "2023-07-01T12:00:00Z", "--perseverance", "-120"])
        out = capsys.readouterr().out
        expected = calculate_mars_time(MID_2023, {"perseverance": -120.0})
        assert expected.perseverance_ltst in out
