# (C) 2024 Irreducible Inc.

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Hashable, TypeVar

M = TypeVar("M")
R = TypeVar("R", bound=Hashable)


class Role(Enum):
    PROVER = "P"
    VERIFIER = "V"

    @property
    def label(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.name.lower()


class PeerGone(RuntimeError):
    """Raised by Channel.receive when the peer has exited and nothing more will ever arrive.

    This always means the two roles disagree about the shape of the protocol: one of them is waiting for a message
    which the other was never going to send.
    """


@dataclass(frozen=True)
class TranscriptEntry(Generic[M, R]):
    producer: R
    consumer: R
    message: M


class TranscriptLog(Generic[M, R]):
    """Append-only record of every message sent on a channel pair, in global send order."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self._entries: list[TranscriptEntry[M, R]] = []

    def append(self, entry: TranscriptEntry[M, R]) -> None:
        # callers hold `lock`; see Channel.send.
        self._entries.append(entry)

    def entries(self) -> list[TranscriptEntry[M, R]]:
        with self.lock:
            return list(self._entries)


_CLOSED = object()  # placed in an endpoint's inbox once its peer is gone


class Channel(Generic[M, R]):
    """One endpoint of a logged, bidirectional channel between two roles."""

    def __init__(self, me: R, you: R, log: TranscriptLog[M, R]) -> None:
        self.me = me
        self.you = you
        self.log = log
        self.inbox: queue.SimpleQueue = queue.SimpleQueue()
        self.peer: Channel[M, R] | None = None
        self.closed = False

    def send(self, message: M) -> None:
        assert self.peer is not None, "endpoint is not connected"
        with self.log.lock:
            self.log.append(TranscriptEntry(self.me, self.you, message))
            # nobody listening is fine: the peer may have legitimately stopped after deciding.
            if not self.peer.closed:
                self.peer.inbox.put(message)

    def receive(self) -> M:
        message = self.inbox.get()
        if message is _CLOSED:
            self.inbox.put(_CLOSED)  # any further receive fails the same way
            raise PeerGone(f"{self.me} is waiting for a message, but {self.you} has already exited")
        return message

    def close(self) -> None:
        assert self.peer is not None, "endpoint is not connected"
        with self.log.lock:
            if self.closed:
                return
            self.closed = True
            self.peer.inbox.put(_CLOSED)


class Coordinator(Generic[M, R]):
    """Hands out connected channel pairs which all write into one shared transcript log."""

    def __init__(self) -> None:
        self.log: TranscriptLog[M, R] = TranscriptLog()

    def create_channel(self, part1: R, part2: R) -> tuple[Channel[M, R], Channel[M, R]]:
        channel1: Channel[M, R] = Channel(part1, part2, self.log)
        channel2: Channel[M, R] = Channel(part2, part1, self.log)
        channel1.peer = channel2
        channel2.peer = channel1
        return channel1, channel2
