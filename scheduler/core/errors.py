"""Domain errors for scheduling.

Rejected intervals (bad ordering, outside business hours, overlap) are not
errors: they come back as verdicts from ``services.availability``. Only input
that cannot be interpreted at all, references to missing records and store
failures are raised.
"""


class SchedulingError(Exception):
    """Base class for scheduling failures."""


class InvalidInputError(SchedulingError, ValueError):
    """A date or time was missing or malformed."""

    reason = "invalid_input"


class UnknownReference(InvalidInputError):
    """A customer, contact, country or division id does not exist."""

    reason = "unknown_reference"


class StoreUnavailable(SchedulingError):
    """The appointment store could not be queried."""
