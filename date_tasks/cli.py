#!filepath: date_tasks/cli.py
from typing import NoReturn, Optional

import typer
from pydantic import ValidationError
from rich import print
from rich.markup import escape

from date_tasks import __version__
from date_tasks.config import AppConfig
from date_tasks.utils.datetime_utils import DateTimeUtils as dt
from date_tasks.utils.errors import UserInputError
from date_tasks.utils.logger import logs

app = typer.Typer(help="Date utilities CLI")


def _fail(e: Exception) -> NoReturn:
    print(f"[red]{escape(str(e))}[/red]")
    raise typer.Exit(code=1)


@app.callback()
def main(
    tz: Optional[str] = typer.Option(None, "--tz", help="Local timezone (IANA name)"),
    config: Optional[str] = typer.Option(None, "--config", help="YAML config file"),
):
    """
    Parse, inspect and compare dates. Instants are ISO 8601 unless stated otherwise.
    """
    try:
        AppConfig.load(path=config).apply()
        if tz:
            dt.set_local_timezone(tz)
    except (UserInputError, ValidationError, FileNotFoundError) as e:
        _fail(e)


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
@logs.catch("rfc2822 failed", passthrough=(typer.Exit,))
def rfc2822(text: str):
    """
    Parse an RFC 2822 date, print it as ISO 8601 (UTC)
    """
    try:
        print(dt.parse_from_rfc2822(text).to_iso8601())
    except UserInputError as e:
        _fail(e)


@app.command()
@logs.catch("iso8601 failed", passthrough=(typer.Exit,))
def iso8601(text: str):
    """
    Parse an ISO 8601 date, print it normalized to UTC
    """
    try:
        print(dt.parse_from_iso8601(text).to_iso8601())
    except UserInputError as e:
        _fail(e)


@app.command("leap-year")
@logs.catch("leap-year failed", passthrough=(typer.Exit,))
def leap_year(text: str):
    """
    Is the (local) year of the date a leap year?
    """
    try:
        instant = dt.parse_from_iso8601(text)
    except UserInputError as e:
        _fail(e)

    year = instant.fields(dt.local_timezone()).year
    if dt.is_leap_year(instant):
        print(f"[green]{year} is a leap year[/green]")
    else:
        print(f"{year} is not a leap year")


@app.command()
@logs.catch("timespan failed", passthrough=(typer.Exit,))
def timespan(start: str, end: str):
    """
    Time between START and END as HH:mm:ss.sss
    """
    try:
        s = dt.parse_from_iso8601(start)
        e = dt.parse_from_iso8601(end)
    except UserInputError as err:
        _fail(err)

    print(dt.format_time_span(s, e))


@app.command("clock-angle")
@logs.catch("clock-angle failed", passthrough=(typer.Exit,))
def clock_angle(
    text: str,
    degrees: bool = typer.Option(False, "--degrees", help="Print degrees instead of radians"),
):
    """
    Angle between the hands of an analog clock at the given UTC time
    """
    try:
        instant = dt.parse_from_iso8601(text)
    except UserInputError as e:
        _fail(e)

    if degrees:
        print(dt.clock_hand_angle_degrees(instant))
    else:
        print(dt.clock_hand_angle(instant))


if __name__ == "__main__":
    app()

# python -m date_tasks.cli clock-angle 2016-04-05T03:00:00Z
