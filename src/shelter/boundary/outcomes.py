"""Tagged event outcomes.

Processing either completes or fails with one of two failure variants.
Exceptions are converted to these values once, at the boundary edge, so
the boundary decides what to display with a plain ``match``.
"""

from dataclasses import dataclass, field

from shelter.errors import ShareError


@dataclass(frozen=True, slots=True)
class Completed:
    """The event was processed normally."""


@dataclass(frozen=True, slots=True)
class DomainFailure:
    """An expected failure whose message is safe to show verbatim."""

    message: str


@dataclass(frozen=True, slots=True)
class InternalFault:
    """An unclassified failure. The message is for operators only."""

    message: str
    exc: BaseException | None = field(default=None, compare=False, repr=False)


Failure = DomainFailure | InternalFault
Outcome = Completed | DomainFailure | InternalFault

COMPLETED = Completed()


def classify(exc: Exception) -> Failure:
    """Convert a raised exception into a tagged failure.

    Never raises: an exception that cannot describe itself is reported
    as an internal fault under its type name.
    """
    try:
        if isinstance(exc, ShareError):
            message = getattr(exc, "message", None) or Exception.__str__(exc)
            if message:
                return DomainFailure(message)
            return InternalFault(type(exc).__name__, exc)
        return InternalFault(f"{type(exc).__name__}: {exc}", exc)
    except Exception:
        return InternalFault(type(exc).__name__, exc)


def as_outcome(result: object) -> Outcome:
    """Interpret a processing return value.

    Processing may return a failure explicitly instead of raising.
    Any other return value counts as normal completion.
    """
    if isinstance(result, Completed | DomainFailure | InternalFault):
        return result
    return COMPLETED
