# (C) 2024 Irreducible Inc.

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Generic, TypeVar

from .channel import Channel, Coordinator, PeerGone, Role, TranscriptEntry
from .messages import Decision

M = TypeVar("M")

logger = logging.getLogger(__name__)


class InteractiveProtocol(ABC, Generic[M]):
    """One side of a two-party interactive protocol.

    `execute` performs this role's whole sequence of sends and receives on the given channel. It must mirror the
    sequence of the peer role message for message: an extra receive is a bug (it ends in PeerGone), while an extra
    send is harmless, since a message nobody reads is simply dropped. There is no return value; the outcome is
    whatever the roles put on the channel, typically a final Decision from the verifier.
    """

    @abstractmethod
    def execute(self, channel: Channel[M, Role]) -> None:
        pass


class Transcript(Generic[M]):
    """The ordered log of a finished protocol run."""

    def __init__(self, entries: list[TranscriptEntry[M, Role]]) -> None:
        self.entries = entries

    def messages_from(self, role: Role) -> list[M]:
        return [entry.message for entry in self.entries if entry.producer == role]

    def decision(self) -> Decision | None:
        decisions = [entry.message for entry in self.entries if isinstance(entry.message, Decision)]
        return decisions[-1] if decisions else None

    def render(self) -> list[str]:
        return [f"{entry.producer.label}: {entry.message}" for entry in self.entries]

    def __len__(self) -> int:
        return len(self.entries)


def _run_role(role: InteractiveProtocol[M], channel: Channel[M, Role]) -> None:
    try:
        role.execute(channel)
    finally:
        channel.close()  # wakes the peer if it is still waiting on us


def execute(prover: InteractiveProtocol[M], verifier: InteractiveProtocol[M]) -> Transcript[M]:
    """Runs prover and verifier concurrently over a fresh channel pair, and returns the transcript of the run."""
    coordinator: Coordinator[M, Role] = Coordinator()
    prover_channel, verifier_channel = coordinator.create_channel(Role.PROVER, Role.VERIFIER)

    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="ip") as pool:
        futures = [
            pool.submit(_run_role, prover, prover_channel),
            pool.submit(_run_role, verifier, verifier_channel),
        ]
    errors = [error for error in (future.exception() for future in futures) if error is not None]
    if errors:
        # a role which fails makes its peer fail with PeerGone; report the original failure.
        errors.sort(key=lambda error: isinstance(error, PeerGone))
        raise errors[0]

    transcript = Transcript(coordinator.log.entries())
    for line in transcript.render():
        logger.info("%s", line)
    return transcript
