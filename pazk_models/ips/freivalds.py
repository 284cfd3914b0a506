# (C) 2024 Irreducible Inc.

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

import numpy as np
from galois import FieldArray

from .channel import Channel
from .messages import Decision, expect
from .protocol import InteractiveProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class MatrixMessage:
    matrix: FieldArray

    def __str__(self) -> str:
        return str(self.matrix.view(np.ndarray).tolist())


def powers_vector(r: FieldArray, n: int) -> FieldArray:
    """Returns (1, r, r², ..., rⁿ⁻¹) over the field of r."""
    field = type(r)
    entries = []
    power = field(1)
    for _ in range(n):
        entries.append(int(power))
        power = power * r
    return field(entries)


def freivalds_check(a: FieldArray, b: FieldArray, c: FieldArray, r: FieldArray) -> bool:
    """Probabilistically checks c == a @ b with O(n²) work: compare c ⋅ v against a ⋅ (b ⋅ v) for v = (1, r, r², ...).

    If c != a @ b, the difference c - a @ b has a nonzero row, and that row's dot product with v is a nonzero
    polynomial in r of degree < n; so a uniformly random r is caught except with probability ≤ (n - 1) / |F|.
    """
    v = powers_vector(r, c.shape[1])
    return bool(np.array_equal(c @ v, a @ (b @ v)))


class FreivaldsProver(InteractiveProtocol):
    """Claims the product a @ b, by simply computing it."""

    def __init__(self, a: FieldArray, b: FieldArray) -> None:
        self.a = a
        self.b = b

    def product(self) -> FieldArray:
        return self.a @ self.b

    def execute(self, channel: Channel) -> None:
        channel.send(MatrixMessage(self.product()))


class TamperedFreivaldsProver(FreivaldsProver):
    """Claims a @ b with exactly one entry incremented by 1."""

    def __init__(self, a: FieldArray, b: FieldArray, rng: random.Random | None = None) -> None:
        super().__init__(a, b)
        self.rng = rng or random.Random()

    def product(self) -> FieldArray:
        c = super().product()
        u = self.rng.randrange(c.shape[0])
        v = self.rng.randrange(c.shape[1])
        c[u, v] += type(c)(1)
        return c


class FreivaldsVerifier(InteractiveProtocol):
    def __init__(self, a: FieldArray, b: FieldArray, rng: random.Random | None = None) -> None:
        assert type(a) is type(b), "a and b must be over the same field"
        assert a.shape[1] == b.shape[0], f"cannot multiply {a.shape} by {b.shape}"
        self.a = a
        self.b = b
        self.rng = rng or random.Random()

    def execute(self, channel: Channel) -> None:
        field = type(self.a)
        c = expect(channel.receive(), MatrixMessage).matrix

        expected_shape = (self.a.shape[0], self.b.shape[1])
        if type(c) is not field or c.shape != expected_shape:
            logger.info("V rejects: claimed product is not a %s matrix over %s", expected_shape, field.name)
            channel.send(Decision(False))
            return

        r = field(self.rng.randrange(field.order))
        logger.debug("V checks C ⋅ v == A ⋅ (B ⋅ v) at r = %s", r)
        channel.send(Decision(freivalds_check(self.a, self.b, c, r)))
