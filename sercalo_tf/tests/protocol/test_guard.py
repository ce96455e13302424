from __future__ import annotations

import threading
import time

import pytest

from sercalo_tf.core.errors import LockTimeout, OutOfRange
from sercalo_tf.protocol.guard import ExclusiveAccessGuard


def test_run_returns_operation_result():
    guard = ExclusiveAccessGuard()
    assert guard.run(lambda a, b=0: a + b, 2, b=3) == 5
    assert guard.locked is False


def test_run_propagates_error_and_releases():
    guard = ExclusiveAccessGuard()

    def boom():
        raise ValueError("boom")

    with pytest.raises(ValueError, match="boom"):
        guard.run(boom)

    assert guard.locked is False
    assert guard.run(lambda: "again") == "again"


def test_timeout_does_not_run_operation():
    guard = ExclusiveAccessGuard(timeout_s=0.02)
    ran = []

    with guard.hold():
        def other():
            try:
                guard.run(lambda: ran.append(True))
            except LockTimeout as e:
                ran.append(e)

        th = threading.Thread(target=other)
        th.start()
        th.join()

    assert len(ran) == 1
    assert isinstance(ran[0], LockTimeout)
    assert ran[0].details == {"timeout_s": 0.02}


def test_waiter_gets_lock_after_release():
    guard = ExclusiveAccessGuard(timeout_s=1.0)
    order = []

    def first():
        with guard.hold():
            order.append("first-in")
            time.sleep(0.05)
            order.append("first-out")

    th = threading.Thread(target=first)
    th.start()
    while not order:
        time.sleep(0.001)

    guard.run(lambda: order.append("second"))
    th.join()

    assert order == ["first-in", "first-out", "second"]


def test_guards_are_independent():
    a = ExclusiveAccessGuard(timeout_s=0.01)
    b = ExclusiveAccessGuard(timeout_s=0.01)

    with a.hold():
        assert b.run(lambda: "free") == "free"


def test_timeout_is_adjustable():
    guard = ExclusiveAccessGuard()
    guard.timeout_s = 0.25
    assert guard.timeout_s == 0.25


@pytest.mark.parametrize("bad", [-0.5, -1, float("inf"), float("nan"), "1", True])
def test_invalid_timeout_is_rejected(bad):
    with pytest.raises(OutOfRange):
        ExclusiveAccessGuard(timeout_s=bad)

    guard = ExclusiveAccessGuard(timeout_s=0.1)
    with pytest.raises(OutOfRange):
        guard.timeout_s = bad
    assert guard.timeout_s == 0.1


def test_zero_timeout_reports_busy_instead_of_blocking():
    guard = ExclusiveAccessGuard(timeout_s=0)

    with guard.hold():
        with pytest.raises(LockTimeout):
            guard.run(lambda: "never")
