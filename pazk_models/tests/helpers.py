# (C) 2024 Irreducible Inc.

from typing import TypeVar

from hypothesis import strategies as st

from pazk_models.finite_fields.prime_field import PrimeFieldElem
from pazk_models.polynomials.multivariate import Polynomial

F = TypeVar("F", bound=PrimeFieldElem)


def random_integers_strategy(
    min_value: int,
    max_value: int,
) -> st.SearchStrategy[int]:
    return st.builds(lambda rng: rng.randint(min_value, max_value), st.randoms(use_true_random=True))


def field_elements(field: type[F]) -> st.SearchStrategy[F]:
    return st.integers(0, field.field.prime - 1).map(field)


def polynomials(field: type[F], variables: int, max_exponent: int = 3, max_terms: int = 6) -> st.SearchStrategy:
    """Sparse polynomials in the given number of variables, each exponent at most `max_exponent`."""
    pairs = st.lists(st.tuples(st.integers(0, variables - 1), st.integers(1, max_exponent)), max_size=variables)
    terms = st.lists(st.tuples(st.integers(0, field.field.prime - 1), pairs), max_size=max_terms)
    return terms.map(lambda spec: Polynomial.from_terms(field, variables, spec))
