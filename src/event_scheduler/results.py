"""
Result types and the error taxonomy shared by every operation.

parse / insert / add_event / save / load return Success(value) or
Failure(error) instead of raising, so the Tk layer can show a message box
without wrapping every call in try/except.

Every error carries a user-facing `message`; str(error) returns it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E", bound="SchedulerError")


class SchedulerError(Exception):
    """Base class for everything the app reports to the user."""

    default_message = "Something went wrong."

    def __init__(self, message: str = "") -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(SchedulerError):
    """A required form field is empty or holds an unknown value."""
    default_message = "Please fill all fields."


class ParseError(SchedulerError):
    """Date or time text does not match dd-MM-yyyy / HH:mm."""
    default_message = "Invalid date/time format."


class DuplicateTimestamp(SchedulerError):
    """An event already starts at exactly this point in time."""
    default_message = "Event time overlaps with another event."


class StorageError(SchedulerError):
    """The events file could not be read or written."""
    default_message = "Could not access the events file."


class FormatError(SchedulerError):
    """The events file was read but is not a valid event list."""
    default_message = "The events file is corrupt or has an unexpected format."


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure(Generic[E]):
    error: E

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return self.error.message


Result = Union[Success[T], Failure[SchedulerError]]
