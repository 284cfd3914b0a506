# (C) 2024 Irreducible Inc.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ..finite_fields.finite_field import FiniteFieldElem
from ..polynomials.univariate import UnivariatePolynomial

F = TypeVar("F", bound=FiniteFieldElem)
T = TypeVar("T")


class MalformedMessage(TypeError):
    """A role received a message of a kind it did not expect at this point of the protocol."""


@dataclass(frozen=True)
class Scalar(Generic[F]):
    value: F

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UnivariateMessage(Generic[F]):
    polynomial: UnivariatePolynomial[F]

    def __str__(self) -> str:
        return self.polynomial.format("x")


@dataclass(frozen=True)
class Decision:
    accept: bool

    def __str__(self) -> str:
        return "Accept" if self.accept else "Reject"


ACCEPT = Decision(True)
REJECT = Decision(False)


def expect(message: Any, kind: type[T]) -> T:
    """Returns `message` if it is of the given kind; anything else means the two roles are out of step."""
    if not isinstance(message, kind):
        raise MalformedMessage(f"expected {kind.__name__}, received {type(message).__name__}: {message}")
    return message
