#!filepath: tests/test_cli.py
import math

import pytest
import yaml
from typer.testing import CliRunner

from date_tasks.cli import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "v0.1.0" in result.output


def test_rfc2822():
    result = runner.invoke(app, ["rfc2822", "Sun, 17 May 1998 03:00:00 GMT+01"])
    assert result.exit_code == 0
    assert "1998-05-17T02:00:00.000Z" in result.output


def test_rfc2822_invalid():
    result = runner.invoke(app, ["rfc2822", "garbage [x]"])
    assert result.exit_code == 1
    assert "cannot parse" in result.output
    assert "RFC 2822" in result.output


def test_iso8601():
    result = runner.invoke(app, ["iso8601", "2016-01-19T16:07:37+08:00"])
    assert result.exit_code == 0
    assert "2016-01-19T08:07:37.000Z" in result.output


def test_iso8601_with_local_timezone():
    result = runner.invoke(app, ["--tz", "Asia/Shanghai", "iso8601", "2016-01-19T16:07:37"])
    assert result.exit_code == 0
    assert "2016-01-19T08:07:37.000Z" in result.output


def test_leap_year():
    result = runner.invoke(app, ["leap-year", "2000-02-01"])
    assert result.exit_code == 0
    assert "2000 is a leap year" in result.output

    result = runner.invoke(app, ["leap-year", "1900-02-01"])
    assert "1900 is not a leap year" in result.output


def test_leap_year_uses_tz_option():
    result = runner.invoke(app, ["--tz", "Asia/Tokyo", "leap-year", "2016-12-31T20:00:00Z"])
    assert result.exit_code == 0
    assert "2017 is not a leap year" in result.output


def test_timespan():
    result = runner.invoke(app, ["timespan", "2000-02-01T10:00:00", "2000-02-01T15:20:10.453"])
    assert result.exit_code == 0
    assert "05:20:10.453" in result.output


def test_timespan_invalid_end():
    result = runner.invoke(app, ["timespan", "2000-02-01T10:00:00", "tomorrow"])
    assert result.exit_code == 1
    assert "ISO 8601" in result.output


@pytest.mark.parametrize(
    "args, expected",
    [
        (["clock-angle", "2016-04-05T03:00:00Z"], math.pi / 2),
        (["clock-angle", "2016-04-05T18:00:00Z"], math.pi),
        (["clock-angle", "--degrees", "2016-04-05T21:00:00Z"], 90.0),
    ],
)
def test_clock_angle(args, expected):
    result = runner.invoke(app, args)
    assert result.exit_code == 0
    assert float(result.output.strip()) == pytest.approx(expected)


def test_unknown_tz_option():
    result = runner.invoke(app, ["--tz", "Nowhere/City", "version"])
    assert result.exit_code == 1
    assert "unknown timezone" in result.output


def test_config_option(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        yaml.safe_dump({"log": {}, "date": {"local_timezone": "Asia/Tokyo"}}),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["--config", str(config_file), "iso8601", "2016-01-19T09:00:00"])
    assert result.exit_code == 0
    assert "2016-01-19T00:00:00.000Z" in result.output


def test_missing_config_file(tmp_path):
    result = runner.invoke(app, ["--config", str(tmp_path / "nope.yaml"), "version"])
    assert result.exit_code == 1
    assert "Config file not found" in result.output
