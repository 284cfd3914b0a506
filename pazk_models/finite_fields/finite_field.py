# (C) 2024 Irreducible Inc.

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Generic, Self, TypeVar

R = TypeVar("R")


@dataclass(frozen=True)
class FiniteFieldElem(Generic[R]):
    """A finite field element.

    This class cannot be instantiated directly. Instead, each particular field implementation should subclass this
    and set the field class variable to an instance of FiniteField. Then the class can be instantiated with values
    of the appropriate representation.
    """

    value: R
    field: ClassVar[FiniteField]

    def __add__(self, other: Self) -> Self:
        return self.__class__(self.field.add(self.value, other.value))

    def __mul__(self, other: Self) -> Self:
        return self.__class__(self.field.multiply(self.value, other.value))

    def __sub__(self, other: Self) -> Self:
        return self.__class__(self.field.subtract(self.value, other.value))

    def __truediv__(self, other: Self) -> Self:
        return self.__class__(self.field.divide(self.value, other.value))

    def __neg__(self) -> Self:
        return self.__class__(self.field.negate(self.value))

    def inverse(self) -> Self:
        return self.__class__(self.field.inverse(self.value))

    def square(self) -> Self:
        return self.__class__(self.field.square(self.value))

    def __pow__(self, exponent: int) -> Self:
        return self.__class__(self.field.pow(self.value, exponent))

    def __eq__(self, other) -> bool:
        if not isinstance(other, FiniteFieldElem):
            return NotImplemented
        return bool(self.value == other.value)

    def __str__(self) -> str:
        return self.field.format_str(self.value)

    def __repr__(self) -> str:
        return self.field.format_repr(self.value)

    def is_zero(self) -> bool:
        return bool(self.value == self.field.zero())

    def __bool__(self) -> bool:
        return not self.is_zero()

    @classmethod
    def zero(cls) -> Self:
        return cls(cls.field.zero())

    @classmethod
    def one(cls) -> Self:
        return cls(cls.field.one())

    @classmethod
    def random(cls, rng: random.Random | None = None) -> Self:
        return cls(cls.field.random(rng))

    @classmethod
    def from_int(cls, val: int) -> Self:
        return cls(cls.field.from_int(val))


class FiniteField(ABC, Generic[R]):
    """A finite field implementation.

    All finite fields have order p^n, where p is a prime number. An instance of FiniteField encapsulates the
    representation of field elements and the logic for all basic field operations: addition, negation,
    multiplication, and inversion. The interactive protocols only ever see elements through FiniteFieldElem.
    """

    @property
    @abstractmethod
    def characteristic(self) -> int:
        """The field characteristic, ie. the order of the base field."""
        pass

    @property
    @abstractmethod
    def order(self) -> int:
        """The number of elements of the field."""
        pass

    def zero(self) -> R:
        return self.from_int(0)

    def one(self) -> R:
        return self.from_int(1)

    @abstractmethod
    def random(self, rng: random.Random | None = None) -> R:
        """Samples an element uniformly; uses the module-level generator when `rng` is None."""
        pass

    @abstractmethod
    def add(self, left: R, right: R) -> R:
        pass

    @abstractmethod
    def subtract(self, left: R, right: R) -> R:
        pass

    @abstractmethod
    def negate(self, operand: R) -> R:
        pass

    @abstractmethod
    def multiply(self, left: R, right: R) -> R:
        pass

    def square(self, operand: R) -> R:
        return self.multiply(operand, operand)

    def pow(self, base: R, exponent: int) -> R:
        acc = self.one()
        val = base

        while exponent:
            if exponent % 2:
                acc = self.multiply(acc, val)
            val = self.square(val)
            exponent >>= 1

        return acc

    @abstractmethod
    def inverse(self, operand: R) -> R:
        pass

    def divide(self, left: R, right: R) -> R:
        return self.multiply(left, self.inverse(right))

    @abstractmethod
    def format_str(self, elem: R) -> str:
        pass

    @abstractmethod
    def format_repr(self, elem: R) -> str:
        pass

    @abstractmethod
    def from_int(self, val: int) -> R:
        """Creates a field element from an integer.

        The integer argument will be automatically converted to val % p, where p is the field's prime characteristic.
        """
        pass
