"""CommandShell — the interactive console loop.

Each command number maps onto one QuerySession operation.  Every failure
the pipeline raises (validation, format, network, remote, state) is
printed and the loop waits for the next command; only EXIT or the end of
input stops it.

Invalid input is re-prompted in a bounded loop.  A blank line aborts the
current command.
"""

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Callable
from datetime import datetime, timezone
from typing import TextIO

from quake_stats.domain.enums import Command, InputKind
from quake_stats.domain.errors import QuakeStatsError
from quake_stats.domain.query import create_query
from quake_stats.explain.formatter import ReportFormatter
from quake_stats.store.session import QuerySession

logger = logging.getLogger(__name__)

MAX_STRING_INPUT = 512

# YYYY-MM-DD:HH, UTC assumed; ranges of month, day and hour checked here.
_TIMESTAMP_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01]):([01]\d|2[0-3])$")


class InputAborted(Exception):
    """The user left a prompt blank or never gave valid input."""


def parse_timestamp(text: str) -> datetime:
    """Parse ``YYYY-MM-DD:HH`` as a UTC datetime.

    Raises:
        ValueError: If the format or any date component is invalid.
    """
    if not _TIMESTAMP_PATTERN.match(text):
        raise ValueError(f"{text} is invalid input; must be in 'YYYY-MM-DD:HH' format (UTC time zone).")
    date_part, hour_part = text.split(":")
    try:
        day = datetime.strptime(date_part, "%Y-%m-%d")
    except ValueError as exc:
        raise ValueError(
            f"{text} is invalid input; one of the date components is out of bounds."
        ) from exc
    return day.replace(hour=int(hour_part), tzinfo=timezone.utc)


class CommandShell:
    """Reads command numbers and drives a QuerySession.

    Args:
        session: The session holding the data set and report history.
        input_fn: Returns the next line of input; raises EOFError at the end.
        out: Where user-facing text is written.
        prompt_attempts: Invalid answers tolerated per prompt.
    """

    def __init__(
        self,
        session: QuerySession,
        input_fn: Callable[[], str] = input,
        out: TextIO | None = None,
        prompt_attempts: int = 5,
        formatter: ReportFormatter | None = None,
    ) -> None:
        self._session = session
        self._input = input_fn
        self._out = out or sys.stdout
        self._prompt_attempts = prompt_attempts
        self._formatter = formatter or ReportFormatter()
        self._handlers: dict[Command, Callable[[], bool]] = {
            Command.QUERY: self.submit_query,
            Command.REPORT: self.generate_report,
            Command.RAW_DATA: self.view_raw_data_set,
            Command.EXPORT: self.export_all_reports,
            Command.COMPARE: self.compare_to_previous_report,
            Command.EXIT: self.exit_program,
            Command.MANUAL: self.show_manual,
        }

    # ── Loop ─────────────────────────────────────────────────────────────

    def run(self) -> None:
        """Process commands until EXIT or end of input."""
        while True:
            try:
                if not self.cycle():
                    return
            except EOFError:
                self._print("End of input; exiting.")
                return
            except (QuakeStatsError, InputAborted) as exc:
                logger.info("Command failed: %s", exc)
                self._print(f"ERROR ENCOUNTERED: {exc}")

    def cycle(self) -> bool:
        """Run a single command.  Returns False once the user asks to exit."""
        raw = self.prompt(InputKind.INTEGER, "Enter command (type '7' for help): ")
        try:
            command = Command(raw)
        except ValueError:
            self._print("Invalid command; please input a valid command number (1-7).")
            return True
        return self._handlers[command]()

    # ── Input ────────────────────────────────────────────────────────────

    def prompt(self, kind: InputKind, message: str) -> str:
        """Ask until the answer parses as *kind*, at most ``prompt_attempts`` times.

        Raises:
            InputAborted: On a blank answer or when the attempts run out.
        """
        for _ in range(self._prompt_attempts):
            self._print(message)
            answer = self._input().strip()
            if not answer:
                raise InputAborted("Input averted")

            problem = self._check(kind, answer)
            if problem is None:
                return answer
            self._print(problem)

        raise InputAborted(f"No valid input after {self._prompt_attempts} attempts")

    @staticmethod
    def _check(kind: InputKind, answer: str) -> str | None:
        if kind is InputKind.STRING:
            if len(answer) > MAX_STRING_INPUT:
                return f"Input is excessively long; must be {MAX_STRING_INPUT} characters or less."
        elif kind is InputKind.INTEGER:
            try:
                int(answer)
            except ValueError:
                return f"{answer} is invalid input; must be an integer."
        elif kind is InputKind.DECIMAL:
            try:
                float(answer)
            except ValueError:
                return f"{answer} is invalid input; must be a decimal."
        elif kind is InputKind.TIMESTAMP:
            try:
                parse_timestamp(answer)
            except ValueError as exc:
                return str(exc)
        return None

    def _ask_int(self, message: str) -> int:
        return int(self.prompt(InputKind.INTEGER, message))

    def _ask_float(self, message: str) -> float:
        return float(self.prompt(InputKind.DECIMAL, message))

    def _ask_time(self, message: str) -> datetime:
        return parse_timestamp(self.prompt(InputKind.TIMESTAMP, message))

    def _print(self, text: str) -> None:
        self._out.write(text + "\n")

    # ── Commands ─────────────────────────────────────────────────────────

    def submit_query(self) -> bool:
        start = self._ask_time("Enter the start timestamp (format 'YYYY-MM-DD:HH' in UTC timezone): ")
        end = self._ask_time("Enter the end timestamp (format 'YYYY-MM-DD:HH' in UTC timezone): ")
        query = create_query(
            limit=self._ask_int("Enter the limit of earthquake entries to retrieve (1-20000): "),
            latitude=self._ask_float("Enter the latitude of the center point of area (-90 to 90): "),
            longitude=self._ask_float("Enter the longitude of the center point of area (-180 to 180): "),
            radius_km=self._ask_int(
                "Enter the maximum radius from center point to retrieve earthquake entries "
                "(in kilometers, 1 to 20001): "
            ),
            start_time=start,
            end_time=end,
            min_magnitude=self._ask_float(
                "Enter the minimum magnitude of earthquake entries to retrieve (-5.0 to 10.0): "
            ),
            max_magnitude=self._ask_float(
                "Enter the maximum magnitude of earthquake entries to retrieve (-5.0 to 10.0): "
            ),
            min_depth=self._ask_float(
                "Enter the minimum depth of earthquake entries to retrieve "
                "(in kilometers, greater than 0 to 800): "
            ),
            max_depth=self._ask_float(
                "Enter the maximum depth of earthquake entries to retrieve "
                "(in kilometers, greater than 0 to 800): "
            ),
        )
        entries = self._session.submit_query(query)
        self._print(
            f"Query submitted, responded, converted, and stored successfully "
            f"({len(entries)} moment-magnitude entr{'y' if len(entries) == 1 else 'ies'})."
        )
        return True

    def generate_report(self) -> bool:
        report = self._session.generate_report()
        self._print(self._formatter.format_report(report))
        return True

    def view_raw_data_set(self) -> bool:
        entries = self._session.raw_data_set()
        if not entries:
            self._print("Current data set is empty; no earthquake entries retrieved from last query.")
            return True
        self._print(self._formatter.format_raw_data_set(entries))
        return True

    def export_all_reports(self) -> bool:
        self._print(self._formatter.format_export(self._session.export_reports()))
        return True

    def compare_to_previous_report(self) -> bool:
        self._print(self._formatter.format_comparison(self._session.compare_latest()))
        return True

    def exit_program(self) -> bool:
        self._print("Exiting program... Goodbye!")
        return False

    def show_manual(self) -> bool:
        self._print(self._formatter.format_manual())
        return True
