# (C) 2024 Irreducible Inc.

from __future__ import annotations

import logging
import random
from typing import Generic, TypeVar

from ..finite_fields.finite_field import FiniteFieldElem
from ..polynomials.multivariate import Polynomial, into_univariate, partial_eval, partial_summation, variable_degrees
from ..polynomials.univariate import UnivariatePolynomial
from .channel import Channel
from .messages import Decision, Scalar, UnivariateMessage, expect
from .protocol import InteractiveProtocol, Transcript, execute

F = TypeVar("F", bound=FiniteFieldElem)

logger = logging.getLogger(__name__)


def compute_round_polynomial(poly: Polynomial[F], j: int) -> UnivariatePolynomial[F]:
    # g_j(X) = Σ_{b ∈ {0, 1}ʲ} poly(b, X), where the variables above j have already been bound to challenges.
    field = poly.field
    selections: list[list[F] | None] = [[field.zero(), field.one()] if n < j else None for n in range(poly.variables)]
    return into_univariate(partial_summation(poly, selections), j)


class SumcheckProver(InteractiveProtocol, Generic[F]):
    """Honest sumcheck prover.

    Variables are processed from the highest index down to 0. In round j the prover sends g_j, then (unless j = 0)
    binds x_j to the verifier's challenge r_j.
    """

    def __init__(self, polynomial: Polynomial[F]) -> None:
        self.polynomial = polynomial

    def execute(self, channel: Channel) -> None:
        poly = self.polynomial
        for j in reversed(range(poly.variables)):
            logger.debug("P computes univariate polynomial g_%d", j)
            g = compute_round_polynomial(poly, j)
            logger.debug("P --> (g_%d = %s)", j, g)
            channel.send(UnivariateMessage(g))

            if j > 0:  # the last challenge is never sent
                message = channel.receive()
                if isinstance(message, Decision):
                    logger.debug("P stops: V decided %s", message)
                    return
                challenge = expect(message, Scalar).value
                logger.debug("P computes partial evaluation at x_%d = r_%d", j, j)
                poly = partial_eval(poly, challenge, j)


class DishonestSumcheckProver(InteractiveProtocol, Generic[F]):
    """A prover which defends `claimed_sum` whether or not it is the true sum.

    Each round it sends g_j + δ ⋅ (X − a) / (1 − 2a), where δ is the gap between its running claim and the true
    g_j(0) + g_j(1), and a is random. the result always passes the verifier's consistency check, and it has degree at
    most max(deg g_j, 1). the prover gets back onto the true polynomial only if the verifier's challenge equals a.
    """

    def __init__(self, polynomial: Polynomial[F], claimed_sum: F, rng: random.Random | None = None) -> None:
        assert polynomial.field.field.characteristic != 2, "1 − 2a is never invertible in characteristic 2"
        self.polynomial = polynomial
        self.claimed_sum = claimed_sum
        self.rng = rng

    def _sample_root(self) -> F:
        field = self.polynomial.field
        while True:
            a = field.random(self.rng)
            if field.one() - a - a:
                return a

    def execute(self, channel: Channel) -> None:
        field = self.polynomial.field
        poly = self.polynomial
        claim = self.claimed_sum
        for j in reversed(range(poly.variables)):
            g = compute_round_polynomial(poly, j)
            delta = claim - (g.evaluate(field.zero()) + g.evaluate(field.one()))
            if delta:
                a = self._sample_root()
                slope = delta / (field.one() - a - a)
                g = g + UnivariatePolynomial(field, [-(a * slope), slope])
                logger.debug("P shifts g_%d by %s so that it matches the claim", j, delta)
            channel.send(UnivariateMessage(g))

            if j > 0:
                message = channel.receive()
                if isinstance(message, Decision):
                    return
                challenge = expect(message, Scalar).value
                claim = g.evaluate(challenge)
                poly = partial_eval(poly, challenge, j)


class SumcheckVerifier(InteractiveProtocol, Generic[F]):
    """Sumcheck verifier for the claim Σ_{x ∈ {0, 1}ᵛ} polynomial(x) = claimed_sum.

    The verifier has oracle access to `polynomial`, which it queries exactly once, at the end. the degree bounds of
    the round polynomials are fixed up front from the variable degrees of `polynomial`. after a run, `challenges`
    holds r_0, ..., r_{v - 1} in variable order.
    """

    def __init__(self, polynomial: Polynomial[F], claimed_sum: F, rng: random.Random | None = None) -> None:
        self.polynomial = polynomial
        self.claimed_sum = claimed_sum
        self.degrees = variable_degrees(polynomial)
        self.rng = rng
        self.challenges: list[F] = []

    def _reject(self, channel: Channel, reason: str) -> None:
        logger.info("V rejects: %s", reason)
        channel.send(Decision(False))

    def execute(self, channel: Channel) -> None:
        field = self.polynomial.field
        zero = field.zero()
        one = field.one()

        check_value = self.claimed_sum
        self.challenges = [zero] * self.polynomial.variables
        for j in reversed(range(self.polynomial.variables)):
            g = expect(channel.receive(), UnivariateMessage).polynomial

            logger.debug("V checks g_%d has small enough degree", j)
            if g.degree > self.degrees[j]:
                self._reject(channel, f"deg g_{j} = {g.degree} exceeds {self.degrees[j]}")
                return

            logger.debug("V checks g_%d sums to check value", j)
            if g.evaluate(zero) + g.evaluate(one) != check_value:
                self._reject(channel, f"g_{j}(0) + g_{j}(1) != {check_value}")
                return

            logger.debug("V picks r_%d uniformly at random", j)
            challenge = field.random(self.rng)
            check_value = g.evaluate(challenge)
            self.challenges[j] = challenge

            if j > 0:
                logger.debug("V --> (r_%d = %s)", j, challenge)
                channel.send(Scalar(challenge))
            else:
                logger.debug("V has (r_0 = %s) but does not send it to P", challenge)

        logger.debug("V evaluates the polynomial at r with a single oracle query")
        oracle_evaluation = self.polynomial.evaluate(self.challenges)
        decision = Decision(oracle_evaluation == check_value)
        logger.debug("V --> (%s)", decision)
        channel.send(decision)


def run_sumcheck(polynomial: Polynomial[F], claimed_sum: F, rng: random.Random | None = None) -> Transcript:
    """Runs the honest prover against a verifier and returns the transcript."""
    return execute(SumcheckProver(polynomial), SumcheckVerifier(polynomial, claimed_sum, rng))
