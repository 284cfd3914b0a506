# (C) 2024 Irreducible Inc.

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import ClassVar, Self, TypeVar

from .finite_field import FiniteField, FiniteFieldElem

R = TypeVar("R")


class PrimeFieldElem(FiniteFieldElem[R]):
    field: ClassVar[PrimeField]

    @classmethod
    def max(cls) -> Self:
        return cls(cls.field.max())

    def to_int(self) -> int:
        return self.field.to_int(self.value)

    def __int__(self) -> int:
        return self.to_int()


class PrimeField(FiniteField[R], ABC):
    """A subclass of FiniteField representing fields with prime order by a single integer."""

    def __init__(self, prime: int):
        self.p = prime
        self.bitlen = self.p.bit_length()
        hexlen = (self.bitlen + 3) // 4
        self.fmt = f"{{:#0{hexlen + 2:d}x}}"

    @property
    def characteristic(self) -> int:
        return self.p

    @property
    def order(self) -> int:
        return self.p

    def max(self) -> R:
        return self.from_int(self.p - 1)

    @abstractmethod
    def to_int(self, elem: R) -> int:
        """Converts from a field element to an integer in the range [0, p)"""
        pass

    def format_str(self, elem: R) -> str:
        return str(self.to_int(elem))

    def format_repr(self, elem: R) -> str:
        return self.fmt.format(self.to_int(elem))

    @property
    def prime(self) -> int:
        return self.p


class PrimeFieldNative(PrimeField[int]):
    def random(self, rng: random.Random | None = None) -> int:
        return (rng or random).randrange(0, self.p)

    def add(self, left: int, right: int) -> int:
        return (left + right) % self.p

    def subtract(self, left: int, right: int) -> int:
        return (left - right) % self.p

    def negate(self, operand: int) -> int:
        return -operand % self.p

    def multiply(self, left: int, right: int) -> int:
        return (left * right) % self.p

    def pow(self, base: int, exponent: int) -> int:
        return pow(base, exponent, self.p)

    def inverse(self, operand: int) -> int:
        assert not operand == self.zero(), "divide by zero"
        return pow(operand, -1, self.p)

    def from_int(self, val: int) -> int:
        return val % self.p

    def to_int(self, elem: int) -> int:
        return elem


# small fields, handy for narrating transcripts and for measuring soundness error empirically.
class F5(PrimeFieldElem[int]):
    field = PrimeFieldNative(5)


class F13(PrimeFieldElem[int]):
    field = PrimeFieldNative(13)


class F251(PrimeFieldElem[int]):
    field = PrimeFieldNative(251)
