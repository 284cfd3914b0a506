# (C) 2024 Irreducible Inc.

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from .channel import Channel
from .messages import Decision, expect
from .protocol import InteractiveProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Number:
    value: int  # a byte

    def __str__(self) -> str:
        return str(self.value)


def add_one(n: int) -> int:
    return (n + 1) % 256  # wrapping byte arithmetic


class AddOneVerifier(InteractiveProtocol):
    """Sends a byte n and accepts iff the prover answers n + 1 (mod 256)."""

    def __init__(self, n: int) -> None:
        assert n in range(256)
        self.n = n

    def execute(self, channel: Channel) -> None:
        channel.send(Number(self.n))
        answer = expect(channel.receive(), Number).value
        decision = Decision(answer == add_one(self.n))
        logger.debug("V --> (%s)", decision)
        channel.send(decision)


class AddOneProver(InteractiveProtocol):
    def execute(self, channel: Channel) -> None:
        n = expect(channel.receive(), Number).value
        channel.send(Number(add_one(n)))


class RandomAddOneProver(InteractiveProtocol):
    """Ignores the question and answers a uniformly random byte."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng

    def execute(self, channel: Channel) -> None:
        expect(channel.receive(), Number)
        channel.send(Number((self.rng or random).randrange(256)))
