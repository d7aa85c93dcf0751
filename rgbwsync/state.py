"""Connection lifecycle state machine.

Transitions are pure: ``transition`` maps the current state and an event to
the next state plus the side effects the connection manager must perform.
Nothing here touches a transport, so every path is testable on its own.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from rgbwsync import const


class ConnectionState(Enum):
    """Lifecycle states of the fixture connection."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True, slots=True)
class Start:
    """The connection target has been resolved."""


@dataclass(frozen=True, slots=True)
class Opened:
    """The transport reported a successful open."""


@dataclass(frozen=True, slots=True)
class MessageReceived:
    """A text frame arrived."""

    text: str


@dataclass(frozen=True, slots=True)
class Closed:
    """The transport closed or failed."""

    reason: str = ""


@dataclass(frozen=True, slots=True)
class RetryTimerFired:
    """The reconnect delay has elapsed."""


Event = Union[Start, Opened, MessageReceived, Closed, RetryTimerFired]


@dataclass(frozen=True, slots=True)
class OpenConnection:
    pass


@dataclass(frozen=True, slots=True)
class AttachSubmit:
    pass


@dataclass(frozen=True, slots=True)
class DetachSubmit:
    pass


@dataclass(frozen=True, slots=True)
class EnableSubmit:
    pass


@dataclass(frozen=True, slots=True)
class ClearConnection:
    pass


@dataclass(frozen=True, slots=True)
class ScheduleReconnect:
    delay: float


@dataclass(frozen=True, slots=True)
class DeliverMessage:
    text: str


Effect = Union[
    OpenConnection,
    AttachSubmit,
    DetachSubmit,
    EnableSubmit,
    ClearConnection,
    ScheduleReconnect,
    DeliverMessage,
]


@dataclass(frozen=True, slots=True)
class Transition:
    """Result of applying an event to a state."""

    state: ConnectionState
    effects: tuple[Effect, ...] = field(default_factory=tuple)

    @property
    def accepted(self) -> bool:
        return bool(self.effects)


def transition(
    state: ConnectionState,
    event: Event,
    reconnect_delay: float = const.DEFAULT_RECONNECT_DELAY,
) -> Transition:
    """Apply ``event`` to ``state``.

    Events that make no sense in the current state leave it unchanged and
    produce no effects.
    """
    if isinstance(event, Start) and state is ConnectionState.DISCONNECTED:
        return Transition(ConnectionState.CONNECTING, (OpenConnection(),))

    if isinstance(event, RetryTimerFired) and state is ConnectionState.CLOSED:
        return Transition(ConnectionState.CONNECTING, (OpenConnection(),))

    if isinstance(event, Opened) and state is ConnectionState.CONNECTING:
        return Transition(ConnectionState.OPEN, (AttachSubmit(),))

    if isinstance(event, MessageReceived) and state is ConnectionState.OPEN:
        return Transition(ConnectionState.OPEN, (DeliverMessage(event.text),))

    if isinstance(event, Closed) and state in (
        ConnectionState.CONNECTING,
        ConnectionState.OPEN,
    ):
        return Transition(
            ConnectionState.CLOSED,
            (
                DetachSubmit(),
                EnableSubmit(),
                ClearConnection(),
                ScheduleReconnect(reconnect_delay),
            ),
        )

    return Transition(state)
