# (C) 2024 Irreducible Inc.

from __future__ import annotations

from typing import Generic, Iterable, TypeVar

from ..finite_fields.finite_field import FiniteFieldElem
from ..utils.utils import int_to_bits
from .univariate import UnivariatePolynomial

F = TypeVar("F", bound=FiniteFieldElem)

# a monomial is a tuple of (variable index, exponent) pairs, indices strictly increasing and exponents ≥ 1.
# variables which don't appear have exponent 0; the empty tuple is the constant monomial 1.
Monomial = tuple[tuple[int, int], ...]


def monomial(pairs: Iterable[tuple[int, int]]) -> Monomial:
    """Normalizes a list of (variable index, exponent) pairs into a Monomial.

    Repeated indices are multiplied together (their exponents add up) and zero exponents are dropped.
    """
    exponents: dict[int, int] = {}
    for index, exponent in pairs:
        if index < 0 or exponent < 0:
            raise ValueError(f"invalid monomial factor: variable {index}, exponent {exponent}")
        exponents[index] = exponents.get(index, 0) + exponent
    return tuple(sorted((index, exponent) for index, exponent in exponents.items() if exponent > 0))


class Polynomial(Generic[F]):
    """A sparse multivariate polynomial: a map from monomials to their (nonzero) coefficients.

    Instances are never modified after construction; partial summation, partial evaluation etc. all return new
    polynomials over the same number of variables.
    """

    def __init__(self, field: type[F], variables: int, data: dict[Monomial, F]) -> None:
        self.field = field
        self.variables = variables
        self.degree = 0  # `degree` refers to the _total degree_ (!) of the multivariate polynomial.
        for term, coefficient in data.items():
            indices = [index for index, _ in term]
            assert all(0 <= index < variables for index in indices), f"monomial {term}, variables: {variables}"
            assert all(a < b for a, b in zip(indices, indices[1:]))  # strictly increasing, hence unique
            assert all(exponent >= 1 for _, exponent in term)  # absent variables carry the zero exponents
            assert coefficient  # pointless to have 0 coefficients; let's just exclude
            self.degree = max(self.degree, sum(exponent for _, exponent in term))
        self.data = data

    @classmethod
    def from_terms(
        cls, field: type[F], variables: int, terms: Iterable[tuple[F | int, Iterable[tuple[int, int]]]]
    ) -> Polynomial[F]:
        """Builds a polynomial from (coefficient, monomial) pairs, adding up coefficients of equal monomials.

        Coefficients may be given as field elements or as plain integers, which are reduced into the field.
        """
        data: dict[Monomial, F] = {}
        for coefficient, pairs in terms:
            if isinstance(coefficient, int):
                coefficient = field.from_int(coefficient)
            term = monomial(pairs)
            data[term] = data.get(term, field.zero()) + coefficient
        return cls(field, variables, {term: coefficient for term, coefficient in data.items() if coefficient})

    @classmethod
    def constant(cls, field: type[F], variables: int, value: F | int) -> Polynomial[F]:
        return cls.from_terms(field, variables, [(value, ())])

    def is_zero(self) -> bool:
        return not self.data

    def evaluate(self, argument: list[F]) -> F:
        assert len(argument) == self.variables, f"arguments: {len(argument)}, variables: {self.variables}"
        result = self.field.zero()
        for term, coefficient in self.data.items():
            product = coefficient
            for index, exponent in term:
                product *= argument[index] ** exponent
            result += product
        return result

    def __eq__(self, other) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.variables == other.variables and self.data == other.data

    def __str__(self) -> str:
        if not self.data:
            return "0"
        rendered = []
        for term, coefficient in sorted(self.data.items(), key=lambda item: item[0], reverse=True):
            factors = [f"x_{index}" if exponent == 1 else f"x_{index}^{exponent}" for index, exponent in term]
            if not factors:
                rendered.append(str(coefficient))
            elif coefficient == self.field.one():
                rendered.append("*".join(factors))
            else:
                rendered.append("*".join([str(coefficient)] + factors))
        return " + ".join(rendered)

    def __repr__(self) -> str:
        return f"Polynomial(variables={self.variables}, data={self.data!r})"


def power_sums(field: type[F], max_exponent: int, summands: list[F]) -> list[F]:
    """Returns [Σₛ s⁰, Σₛ s¹, ..., Σₛ sᵐᵃˣ_ᵉˣᵖᵒⁿᵉⁿᵗ], the power sums of the given summands.

    Each summand keeps a running power, so the whole table costs (max_exponent + 1) ⋅ len(summands) multiplications.
    """
    powers = [field.one()] * len(summands)
    sums = []
    for _ in range(max_exponent + 1):
        sums.append(sum(powers, field.zero()))
        powers = [power * summand for power, summand in zip(powers, summands)]
    return sums


def variable_degrees(poly: Polynomial[F]) -> list[int]:
    """For each variable, its degree when all the other variables are regarded as constants."""
    degrees = [0] * poly.variables
    for term, coefficient in poly.data.items():
        if not coefficient:
            continue
        for index, exponent in term:
            degrees[index] = max(degrees[index], exponent)
    return degrees


def partial_summation(poly: Polynomial[F], selections: list[list[F] | None]) -> Polynomial[F]:
    """Sums some of the variables of `poly` over finite sets of values, leaving the others free.

    selections[i] is None if the ith variable stays free, or else the list of values to sum it over. summing over
    a singleton is the same as evaluating. since Σ_{s ∈ S} c ⋅ sᵉ ⋅ (rest) = c ⋅ (Σ_{s ∈ S} sᵉ) ⋅ (rest), each
    monomial's coefficient just gets multiplied by the eth power sum of S, once for every summed variable, and we
    never need to enumerate the cartesian product of the selections.
    """
    assert len(selections) == poly.variables, f"selections: {len(selections)}, variables: {poly.variables}"
    degrees = variable_degrees(poly)
    constrained = [
        (index, power_sums(poly.field, degrees[index], selection))
        for index, selection in enumerate(selections)
        if selection is not None
    ]

    terms = []
    for term, coefficient in poly.data.items():
        exponents = dict(term)
        for index, sums in constrained:
            # note that a variable absent from `term` contributes sums[0], namely the size of its selection.
            coefficient *= sums[exponents.get(index, 0)]
        terms.append((coefficient, [(index, exponent) for index, exponent in term if selections[index] is None]))
    return Polynomial.from_terms(poly.field, poly.variables, terms)


def partial_eval(poly: Polynomial[F], value: F, variable: int) -> Polynomial[F]:
    """Evaluates the single variable `variable` of `poly` at `value`."""
    selections: list[list[F] | None] = [None] * poly.variables
    selections[variable] = [value]
    return partial_summation(poly, selections)


def into_univariate(poly: Polynomial[F], variable: int) -> UnivariatePolynomial[F]:
    """Reinterprets a polynomial which only involves `variable` as a univariate polynomial in that variable."""
    coeffs = [poly.field.zero()] * (poly.degree + 1)
    for term, coefficient in poly.data.items():
        assert all(index == variable for index, _ in term), f"monomial {term} involves variables other than {variable}"
        exponent = term[0][1] if term else 0
        coeffs[exponent] += coefficient
    return UnivariatePolynomial(poly.field, coeffs)


def hypercube_sum(poly: Polynomial[F]) -> F:
    # helper method: returns the actual statement that a sumcheck proves; namely, the sum of poly over the cube.
    # brute force, 2ᵛ evaluations; used to set up honest claims and to cross-check partial_summation.
    return sum(
        (
            poly.evaluate([poly.field.from_int(bit) for bit in int_to_bits(h, poly.variables)])
            for h in range(1 << poly.variables)
        ),
        poly.field.zero(),
    )
