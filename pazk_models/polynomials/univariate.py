# (C) 2024 Irreducible Inc.

from __future__ import annotations

from typing import Generic, TypeVar

from ..finite_fields.finite_field import FiniteFieldElem

F = TypeVar("F", bound=FiniteFieldElem)


class UnivariatePolynomial(Generic[F]):
    """A univariate polynomial in dense form; coeffs[i] is the coefficient of x^i.

    Trailing zero coefficients are trimmed on construction, so the zero polynomial has no coefficients at all.
    Its degree is reported as 0, the same as a nonzero constant; the sum-check verifier only ever compares
    degrees against a nonnegative bound, for which this is the right answer.
    """

    def __init__(self, field: type[F], coeffs: list[F]) -> None:
        self.field = field
        coeffs = list(coeffs)
        while coeffs and coeffs[-1].is_zero():
            coeffs.pop()
        self.coeffs = coeffs

    @classmethod
    def from_ints(cls, field: type[F], coeffs: list[int]) -> UnivariatePolynomial[F]:
        return cls(field, [field.from_int(coeff) for coeff in coeffs])

    @property
    def degree(self) -> int:
        return max(len(self.coeffs) - 1, 0)

    def is_zero(self) -> bool:
        return not self.coeffs

    # horner
    def evaluate(self, x: F) -> F:
        result = self.field.zero()
        for coeff in reversed(self.coeffs):
            result = result * x + coeff
        return result

    def __add__(self, other: UnivariatePolynomial[F]) -> UnivariatePolynomial[F]:
        length = max(len(self.coeffs), len(other.coeffs))
        zero = self.field.zero()
        left = self.coeffs + [zero] * (length - len(self.coeffs))
        right = other.coeffs + [zero] * (length - len(other.coeffs))
        return UnivariatePolynomial(self.field, [a + b for a, b in zip(left, right)])

    def __neg__(self) -> UnivariatePolynomial[F]:
        return UnivariatePolynomial(self.field, [-coeff for coeff in self.coeffs])

    def __sub__(self, other: UnivariatePolynomial[F]) -> UnivariatePolynomial[F]:
        return self + (-other)

    def scale(self, scalar: F) -> UnivariatePolynomial[F]:
        return UnivariatePolynomial(self.field, [coeff * scalar for coeff in self.coeffs])

    def __eq__(self, other) -> bool:
        if not isinstance(other, UnivariatePolynomial):
            return NotImplemented
        return self.coeffs == other.coeffs

    def format(self, varname: str = "x") -> str:
        terms = []
        for exponent in reversed(range(len(self.coeffs))):
            coeff = self.coeffs[exponent]
            if coeff.is_zero():
                continue
            is_one = coeff == self.field.one()
            if exponent == 0:
                terms.append(str(coeff))
            elif exponent == 1:
                terms.append(varname if is_one else f"{coeff}*{varname}")
            else:
                terms.append(f"{varname}^{exponent}" if is_one else f"{coeff}*{varname}^{exponent}")
        return " + ".join(terms) if terms else "0"

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"UnivariatePolynomial({self.coeffs!r})"
