# (C) 2024 Irreducible Inc.

import random

from hypothesis import given

from pazk_models.ips.add_one import AddOneProver, AddOneVerifier, Number, RandomAddOneProver, add_one
from pazk_models.ips.channel import Role
from pazk_models.ips.messages import Decision
from pazk_models.ips.protocol import execute
from pazk_models.tests.helpers import random_integers_strategy


@given(n=random_integers_strategy(0, 255))
def test_prescribed_prover(n: int):
    transcript = execute(AddOneProver(), AddOneVerifier(n))
    assert transcript.render() == [f"V: {n}", f"P: {add_one(n)}", "V: Accept"]


def test_wraps_around():
    assert add_one(255) == 0
    transcript = execute(AddOneProver(), AddOneVerifier(255))
    assert transcript.messages_from(Role.PROVER) == [Number(0)]
    assert transcript.decision() == Decision(True)


def test_random_prover():
    rng = random.Random(42)
    outcomes = []
    for _ in range(50):
        n = rng.randrange(256)
        transcript = execute(RandomAddOneProver(random.Random(rng.random())), AddOneVerifier(n))
        (answer,) = transcript.messages_from(Role.PROVER)
        assert transcript.decision() == Decision(answer.value == add_one(n))
        outcomes.append(transcript.decision().accept)
    assert outcomes.count(True) < 10  # a lucky guess has probability 1/256
