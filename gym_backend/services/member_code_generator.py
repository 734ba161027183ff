"""Member code generation.

Member codes have the form ``M<YYYYMMDD><NNNN>`` (e.g. ``M202404070001``): the
local calendar day the member was created plus a 4-digit sequence that restarts
at 0001 every day. Codes sort chronologically and are unique per table.

Uniqueness is layered:

1. ``SequenceStore`` hands out each sequence value once per day within a process.
2. ``MemberCodeGenerator`` seeds the sequence above the highest persisted code
   for today (on startup and on day rollover) and checks every candidate
   against the store before returning it.
3. The UNIQUE constraint on ``members.member_code`` is the final authority;
   ``MemberService.create_member`` retries with a fresh code when an insert
   violates it (another process may insert between our check and our insert).
"""

from __future__ import annotations

import threading
from datetime import date, datetime
from typing import Callable, List, Optional, Protocol
from zoneinfo import ZoneInfo

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gym_backend.models.member import Member
from gym_backend.utils.logger import logger

CODE_PREFIX = "M"
DAY_KEY_FORMAT = "%Y%m%d"
SEQUENCE_WIDTH = 4
MAX_SEQUENCE = 9999
CODE_LENGTH = len(CODE_PREFIX) + 8 + SEQUENCE_WIDTH
DEFAULT_MAX_RETRIES = 10


class MemberCodeError(Exception):
    """Base class for member code errors."""


class MalformedMemberCode(MemberCodeError, ValueError):
    """A code does not match M<YYYYMMDD><NNNN> for the expected day."""


class RecoveryFailure(MemberCodeError):
    """Persisted codes could not be read while seeding the counter."""


class SequenceExhausted(MemberCodeError):
    """More than MAX_SEQUENCE codes were requested for a single day."""


class CodeGenerationExhausted(MemberCodeError):
    """Every candidate within the retry budget already exists."""


class StaleDayKey(MemberCodeError):
    """A sequence was requested for a day the counter has already moved past."""


def day_key(day: date) -> str:
    return day.strftime(DAY_KEY_FORMAT)


def code_prefix(day: date) -> str:
    return f"{CODE_PREFIX}{day_key(day)}"


def format_member_code(day: date, sequence: int) -> str:
    """Render the member code for ``day`` and ``sequence``."""
    if not 1 <= sequence <= MAX_SEQUENCE:
        raise ValueError(f"Sequence must be between 1 and {MAX_SEQUENCE}, got {sequence}")
    return f"{code_prefix(day)}{sequence:0{SEQUENCE_WIDTH}d}"


def parse_sequence(code: str, expected_day_key: str) -> int:
    """
    Extract the sequence number from a member code.

    Args:
        code: Code such as ``M202404070012``
        expected_day_key: ``YYYYMMDD`` the code must belong to

    Returns:
        The integer sequence (12 in the example above)

    Raises:
        MalformedMemberCode: If the code is not a valid code for that day
    """
    if code is None or len(code) != CODE_LENGTH:
        raise MalformedMemberCode(
            f"Member code {code!r} must be exactly {CODE_LENGTH} characters"
        )
    if not code.startswith(CODE_PREFIX):
        raise MalformedMemberCode(f"Member code {code!r} must start with {CODE_PREFIX!r}")
    date_part = code[len(CODE_PREFIX):len(CODE_PREFIX) + 8]
    if date_part != expected_day_key:
        raise MalformedMemberCode(
            f"Member code {code!r} is dated {date_part}, expected {expected_day_key}"
        )
    sequence_part = code[-SEQUENCE_WIDTH:]
    if not (sequence_part.isascii() and sequence_part.isdigit()):
        raise MalformedMemberCode(
            f"Member code {code!r} must end with {SEQUENCE_WIDTH} digits"
        )
    return int(sequence_part)


class MemberCodeStore(Protocol):
    """Read access to persisted member codes."""

    def exists_by_code(self, code: str) -> bool:
        ...

    def find_codes_by_prefix(self, prefix: str) -> List[str]:
        """Codes starting with ``prefix``, highest first."""
        ...


class SqlMemberCodeStore:
    """MemberCodeStore over the members table, one short-lived session per call."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def exists_by_code(self, code: str) -> bool:
        with self.session_factory() as db:
            return (
                db.query(Member.id).filter(Member.member_code == code).first()
                is not None
            )

    def find_codes_by_prefix(self, prefix: str) -> List[str]:
        with self.session_factory() as db:
            rows = (
                db.query(Member.member_code)
                .filter(Member.member_code.like(f"{prefix}%"))
                .order_by(Member.member_code.desc())
                .all()
            )
            return [row[0] for row in rows]


class SequenceStore:
    """Day-scoped counter; every value is handed out at most once per day."""

    def __init__(self):
        self._lock = threading.Lock()
        self.current_day_key = ""
        self.next_sequence = 1

    def next(self, today_key: str) -> int:
        """Return the next sequence for ``today_key``, resetting on a new day."""
        with self._lock:
            if self.current_day_key and today_key < self.current_day_key:
                raise StaleDayKey(
                    f"Counter is on {self.current_day_key}, refusing sequence for {today_key}"
                )
            if today_key != self.current_day_key:
                self.current_day_key = today_key
                self.next_sequence = 1
            if self.next_sequence > MAX_SEQUENCE:
                raise SequenceExhausted(
                    f"All {MAX_SEQUENCE} member codes for {today_key} have been issued"
                )
            sequence = self.next_sequence
            self.next_sequence += 1
            return sequence

    def seed(self, today_key: str, next_sequence: int) -> None:
        with self._lock:
            self.current_day_key = today_key
            self.next_sequence = max(1, next_sequence)

    def day_key(self) -> str:
        with self._lock:
            return self.current_day_key

    def peek(self) -> int:
        with self._lock:
            return self.next_sequence


def local_today(timezone_name: Optional[str] = None) -> Callable[[], date]:
    """Clock returning the current calendar day, server-local unless a zone is given."""
    if timezone_name:
        zone = ZoneInfo(timezone_name)
        return lambda: datetime.now(zone).date()
    return date.today


class MemberCodeGenerator:
    """
    Allocates unique member codes.

    One instance is shared by the whole process (see ``app.state``); tests build
    their own with a fake store and a fixed clock.
    """

    def __init__(
        self,
        store: MemberCodeStore,
        clock: Optional[Callable[[], date]] = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        sequence_store: Optional[SequenceStore] = None,
    ):
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self.store = store
        self.clock = clock or date.today
        self.max_retries = max_retries
        self.sequence = sequence_store or SequenceStore()
        self._rollover_lock = threading.Lock()

    def initialize(self) -> int:
        """Seed the counter from persisted codes for today. Returns the next sequence."""
        with self._rollover_lock:
            return self._recover(self.clock())

    def _recover(self, today: date) -> int:
        key = day_key(today)
        try:
            highest = self._highest_persisted_sequence(today)
        except RecoveryFailure as e:
            logger.warning(f"{e}; starting member codes for {key} at 1")
            highest = 0
        self.sequence.seed(key, highest + 1)
        logger.info(f"Member code counter seeded at {highest + 1} for {key}")
        return highest + 1

    def _highest_persisted_sequence(self, today: date) -> int:
        key = day_key(today)
        try:
            codes = self.store.find_codes_by_prefix(code_prefix(today))
        except SQLAlchemyError as e:
            raise RecoveryFailure(f"Could not load member codes for {key}: {e}") from e

        highest = 0
        for code in codes:
            try:
                highest = max(highest, parse_sequence(code, key))
            except MalformedMemberCode as e:
                logger.warning(f"Skipping persisted member code: {e}")
        return highest

    def _ensure_current_day(self, today: date) -> None:
        key = day_key(today)
        if self.sequence.day_key() == key:
            return
        with self._rollover_lock:
            # Another caller may have recovered while we waited
            if self.sequence.day_key() != key:
                self._recover(today)

    def generate_unique_code(self) -> str:
        """
        Return a member code that does not exist in the store yet.

        Raises:
            SequenceExhausted: If today's sequence space is used up
            CodeGenerationExhausted: If max_retries candidates all collided
        """
        today = self.clock()
        self._ensure_current_day(today)

        attempts = 0
        while attempts < self.max_retries:
            try:
                sequence = self.sequence.next(day_key(today))
            except StaleDayKey as e:
                # Another caller rolled the counter over; follow the clock
                logger.info(f"{e}, re-reading the clock")
                today = self.clock()
                self._ensure_current_day(today)
                continue
            attempts += 1
            code = format_member_code(today, sequence)
            if not self.store.exists_by_code(code):
                return code
            logger.warning(f"Member code {code} already exists, trying next")

        raise CodeGenerationExhausted(
            f"Failed to generate unique member code after {self.max_retries} attempts"
        )

    def preview_next_code(self) -> str:
        """Code the next call would try first, without consuming it."""
        today = self.clock()
        self._ensure_current_day(today)
        return format_member_code(today, min(self.sequence.peek(), MAX_SEQUENCE))
