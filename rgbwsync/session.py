"""Session state shared by the sync components."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from aiohttp import ClientError, ClientWebSocketResponse

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class SubmitEvent:
    """A form submission; handlers may suppress the default action."""

    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


SubmitHandler = Callable[[SubmitEvent], Awaitable[Any]]
InputHandler = Callable[[str], None]
Listener = Callable[["ColorForm"], None]


class ColorForm:
    """Headless model of the color page.

    Holds the chromatic control value, the white control value and the
    submit affordance. Handlers are attached by the sync components; a UI
    renders from the form and registers listeners for changes.
    """

    def __init__(self, displayed: str, white: str) -> None:
        self._displayed = displayed.lower()
        self._white = white.lower()
        self._submit_enabled = False
        self._listeners: list[Listener] = []
        self.input_handler: InputHandler | None = None
        self.submit_handler: SubmitHandler | None = None

    @property
    def displayed(self) -> str:
        return self._displayed

    @property
    def white(self) -> str:
        return self._white

    @property
    def submit_enabled(self) -> bool:
        return self._submit_enabled

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def set_displayed(self, value: str) -> None:
        """Set the chromatic control without firing the input handler."""
        value = value.lower()
        if value != self._displayed:
            self._displayed = value
            self._notify()

    def set_submit_enabled(self, enabled: bool) -> None:
        if enabled != self._submit_enabled:
            self._submit_enabled = enabled
            self._notify()

    def input(self, value: str) -> None:
        """User edited the chromatic control."""
        self.set_displayed(value)
        if self.input_handler is not None:
            self.input_handler(self._displayed)

    def input_white(self, value: str) -> None:
        """User edited the white control."""
        value = value.lower()
        if value != self._white:
            self._white = value
            self._notify()

    async def submit(self) -> SubmitEvent:
        """User submitted the form."""
        event = SubmitEvent()
        if self.submit_handler is not None:
            await self.submit_handler(event)
        else:
            _LOGGER.debug("Form submitted with no submit handler attached")
        return event

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:  # pylint: disable=broad-except
                _LOGGER.exception("Color form listener %r failed", listener)


class SyncSession:
    """Single owner of the mutable sync state.

    ``baseline`` is the chromatic display value believed to match the
    fixture; ``connection`` is the live websocket while one is open.
    """

    def __init__(self, form: ColorForm) -> None:
        self.form = form
        self.baseline = form.displayed
        self.target: str | None = None
        self.connection: ClientWebSocketResponse | None = None

    @property
    def edit_pending(self) -> bool:
        """Return whether the display holds an unsent local edit."""
        return self.form.displayed != self.baseline

    async def send(self, text: str) -> bool:
        """Send a text frame on the live connection; drop it if there is none."""
        ws = self.connection
        if ws is None or ws.closed:
            _LOGGER.debug("No open connection; dropping outbound message %s", text)
            return False
        try:
            await ws.send_str(text)
        except (ConnectionResetError, ClientError) as err:
            _LOGGER.debug("Failed to send outbound message %s: %s", text, err)
            return False
        return True
