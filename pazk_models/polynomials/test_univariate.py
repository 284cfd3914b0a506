# (C) 2024 Irreducible Inc.

from galois import GF, Poly
from hypothesis import given
from hypothesis import strategies as st

from pazk_models.finite_fields.prime_field import F13, F251
from pazk_models.polynomials.univariate import UnivariatePolynomial

GF251 = GF(251)


@given(coeffs=st.lists(st.integers(0, 250), max_size=8), x=st.integers(0, 250))
def test_evaluate_matches_galois(coeffs: list[int], x: int):
    poly = UnivariatePolynomial.from_ints(F251, coeffs)
    reference = Poly(list(reversed(coeffs)) or [0], field=GF251)
    assert int(poly.evaluate(F251(x))) == int(reference(x))


@given(coeffs=st.lists(st.integers(0, 250), max_size=8))
def test_degree_matches_galois(coeffs: list[int]):
    poly = UnivariatePolynomial.from_ints(F251, coeffs)
    reference = Poly(list(reversed(coeffs)) or [0], field=GF251)
    assert poly.degree == reference.degree


def test_trailing_zeros_are_trimmed():
    poly = UnivariatePolynomial.from_ints(F13, [4, 4, 3, 0, 13])
    assert poly.coeffs == [F13(4), F13(4), F13(3)]
    assert poly.degree == 2
    assert poly == UnivariatePolynomial.from_ints(F13, [4, 4, 3])


def test_zero_polynomial():
    zero = UnivariatePolynomial.from_ints(F13, [0, 0])
    assert zero.is_zero()
    assert zero.degree == 0
    assert zero.evaluate(F13(5)) == F13.zero()
    assert str(zero) == "0"


def test_arithmetic():
    g = UnivariatePolynomial.from_ints(F13, [1, 2, 3])
    h = UnivariatePolynomial.from_ints(F13, [12, 11])
    assert g + h == UnivariatePolynomial.from_ints(F13, [0, 0, 3])
    assert g - g == UnivariatePolynomial(F13, [])
    assert g.scale(F13(2)) == UnivariatePolynomial.from_ints(F13, [2, 4, 6])
    assert (g + h).degree == 2
    assert (h - h).is_zero()


def test_format():
    assert UnivariatePolynomial.from_ints(F13, [4, 4, 3]).format() == "3*x^2 + 4*x + 4"
    assert UnivariatePolynomial.from_ints(F13, [1, 1, 1]).format("y") == "y^2 + y + 1"
    assert UnivariatePolynomial.from_ints(F13, [0, 0, 0, 5]).format() == "5*x^3"
    assert str(UnivariatePolynomial.from_ints(F13, [7])) == "7"
