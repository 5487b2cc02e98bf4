"""Translate registry outcomes into HTTP-facing domain errors."""
from __future__ import annotations

from typing import TypeVar

from mockserver.core.exceptions import (
    BadRequestError,
    ConflictError,
    DomainError,
    InternalError,
    NotFoundError,
    ServiceUnavailableError,
)
from mockserver.services.session_registry import Outcome, RegistryFailure

T = TypeVar("T")

_FAILURE_ERRORS: dict[RegistryFailure, type[DomainError]] = {
    RegistryFailure.INVALID_INPUT: BadRequestError,
    RegistryFailure.ALREADY_PRESENT: ConflictError,
    RegistryFailure.CAPACITY: ServiceUnavailableError,
    RegistryFailure.NOT_FOUND: NotFoundError,
}


def normalize_registry_failure(failure: RegistryFailure) -> DomainError:
    error_cls = _FAILURE_ERRORS.get(failure, InternalError)
    return error_cls()


def unwrap(outcome: Outcome[T]) -> T:
    """Return the outcome value or raise the matching :class:`DomainError`."""
    if outcome.failure is not None:
        raise normalize_registry_failure(outcome.failure)
    return outcome.value  # type: ignore[return-value]
