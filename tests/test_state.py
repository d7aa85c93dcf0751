"""Tests for the connection lifecycle state machine."""
from __future__ import annotations

from rgbwsync.state import (
    AttachSubmit,
    ClearConnection,
    Closed,
    ConnectionState,
    DeliverMessage,
    DetachSubmit,
    EnableSubmit,
    MessageReceived,
    Opened,
    OpenConnection,
    RetryTimerFired,
    ScheduleReconnect,
    Start,
    transition,
)


def test_start_connects() -> None:
    result = transition(ConnectionState.DISCONNECTED, Start())
    assert result.state is ConnectionState.CONNECTING
    assert result.effects == (OpenConnection(),)


def test_open_attaches_submit() -> None:
    result = transition(ConnectionState.CONNECTING, Opened())
    assert result.state is ConnectionState.OPEN
    assert result.effects == (AttachSubmit(),)


def test_messages_delivered_only_when_open() -> None:
    result = transition(ConnectionState.OPEN, MessageReceived("{}"))
    assert result.state is ConnectionState.OPEN
    assert result.effects == (DeliverMessage("{}"),)

    ignored = transition(ConnectionState.CONNECTING, MessageReceived("{}"))
    assert ignored.state is ConnectionState.CONNECTING
    assert ignored.effects == ()
    assert not ignored.accepted


def test_close_from_open_schedules_one_reconnect() -> None:
    result = transition(ConnectionState.OPEN, Closed("gone"))
    assert result.state is ConnectionState.CLOSED
    assert result.effects == (
        DetachSubmit(),
        EnableSubmit(),
        ClearConnection(),
        ScheduleReconnect(5.0),
    )
    reconnects = [e for e in result.effects if isinstance(e, ScheduleReconnect)]
    assert len(reconnects) == 1


def test_failed_attempt_schedules_again_without_bound() -> None:
    state = ConnectionState.OPEN
    for _ in range(50):
        closed = transition(state, Closed())
        assert closed.state is ConnectionState.CLOSED
        assert ScheduleReconnect(5.0) in closed.effects
        retry = transition(closed.state, RetryTimerFired())
        assert retry.state is ConnectionState.CONNECTING
        assert retry.effects == (OpenConnection(),)
        state = retry.state


def test_reconnect_delay_is_constant() -> None:
    result = transition(ConnectionState.CONNECTING, Closed(), reconnect_delay=0.25)
    assert ScheduleReconnect(0.25) in result.effects


def test_duplicate_events_are_ignored() -> None:
    assert transition(ConnectionState.CONNECTING, Start()).effects == ()
    assert transition(ConnectionState.OPEN, Opened()).effects == ()
    assert transition(ConnectionState.CLOSED, Closed()).effects == ()
    assert transition(ConnectionState.OPEN, RetryTimerFired()).effects == ()
    assert transition(ConnectionState.DISCONNECTED, Closed()).state is (
        ConnectionState.DISCONNECTED
    )
