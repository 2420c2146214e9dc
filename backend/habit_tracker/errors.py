class HabitTrackerError(Exception):
    """Base class for errors raised by the habit tracker core."""


class ValidationError(HabitTrackerError):
    """Malformed or out-of-range input. Nothing was written."""


class NotFoundError(HabitTrackerError):
    """A referenced habit or day does not exist."""


class ConflictError(HabitTrackerError):
    """A unique row was inserted concurrently by another caller.

    Raised by optimistic inserts and recovered inside ``crud``; it never
    reaches the HTTP layer.
    """
