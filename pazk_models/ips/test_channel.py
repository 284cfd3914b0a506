# (C) 2024 Irreducible Inc.

import threading

import pytest

from pazk_models.finite_fields.prime_field import F13
from pazk_models.ips.channel import Coordinator, PeerGone, Role
from pazk_models.ips.messages import Scalar


def test_delivery_and_log():
    coordinator = Coordinator()
    prover, verifier = coordinator.create_channel(Role.PROVER, Role.VERIFIER)

    prover.send(Scalar(F13(1)))
    prover.send(Scalar(F13(2)))
    verifier.send(Scalar(F13(3)))
    assert verifier.receive() == Scalar(F13(1))
    assert verifier.receive() == Scalar(F13(2))
    assert prover.receive() == Scalar(F13(3))

    entries = coordinator.log.entries()
    assert [(entry.producer, entry.consumer) for entry in entries] == [
        (Role.PROVER, Role.VERIFIER),
        (Role.PROVER, Role.VERIFIER),
        (Role.VERIFIER, Role.PROVER),
    ]
    assert [int(entry.message.value) for entry in entries] == [1, 2, 3]


def test_send_to_closed_peer_is_dropped():
    coordinator = Coordinator()
    prover, verifier = coordinator.create_channel(Role.PROVER, Role.VERIFIER)
    verifier.close()
    prover.send(Scalar(F13(5)))  # no error
    assert len(coordinator.log.entries()) == 1  # but still part of the transcript


def test_receive_from_closed_peer():
    coordinator = Coordinator()
    prover, verifier = coordinator.create_channel(Role.PROVER, Role.VERIFIER)
    prover.send(Scalar(F13(5)))
    prover.close()
    assert verifier.receive() == Scalar(F13(5))  # queued messages are still delivered first
    with pytest.raises(PeerGone):
        verifier.receive()
    with pytest.raises(PeerGone):
        verifier.receive()


def test_close_wakes_blocked_receiver():
    coordinator = Coordinator()
    prover, verifier = coordinator.create_channel(Role.PROVER, Role.VERIFIER)
    errors = []

    def wait() -> None:
        try:
            verifier.receive()
        except PeerGone as error:
            errors.append(error)

    thread = threading.Thread(target=wait)
    thread.start()
    prover.close()
    thread.join(timeout=5)
    assert not thread.is_alive()
    assert len(errors) == 1


def test_concurrent_sends_interleave_in_send_order():
    coordinator = Coordinator()
    prover, verifier = coordinator.create_channel(Role.PROVER, Role.VERIFIER)
    count = 200

    def flood(channel, offset: int) -> None:
        for i in range(count):
            channel.send((offset, i))

    threads = [threading.Thread(target=flood, args=(prover, 0)), threading.Thread(target=flood, args=(verifier, 1))]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    entries = coordinator.log.entries()
    assert len(entries) == 2 * count
    for role, offset in [(Role.PROVER, 0), (Role.VERIFIER, 1)]:
        # each role's own messages keep their order, and are attributed to the right producer
        own = [entry.message for entry in entries if entry.producer == role]
        assert own == [(offset, i) for i in range(count)]
    assert [verifier.receive() for _ in range(count)] == [(0, i) for i in range(count)]
    assert [prover.receive() for _ in range(count)] == [(1, i) for i in range(count)]


def test_role_labels():
    assert Role.PROVER.label == "P"
    assert Role.VERIFIER.label == "V"
    assert str(Role.VERIFIER) == "verifier"
