"""Echo suppression for inbound fixture updates."""
from __future__ import annotations

import logging

from rgbwsync import codec
from rgbwsync.codec import ColorValue
from rgbwsync.session import SyncSession

_LOGGER = logging.getLogger(__name__)


class EchoGuard:
    """Decide whether remote updates may overwrite the displayed color.

    A remote update is applied only while the display still equals the
    synchronized baseline. Once the user has edited the control, remote
    updates are dropped until the edit is submitted, so an in-progress edit
    is never clobbered.
    """

    def __init__(self, session: SyncSession) -> None:
        self._session = session

    def on_local_change(self, displayed: str) -> None:
        """Refresh the submit affordance after a local edit."""
        self._session.form.set_submit_enabled(displayed != self._session.baseline)

    def on_remote_message(self, color: ColorValue) -> bool:
        """Apply a remote color unless a local edit is pending."""
        session = self._session
        if session.edit_pending:
            _LOGGER.debug(
                "Discarding remote color %s; local edit %s pending (baseline %s)",
                codec.encode(color),
                session.form.displayed,
                session.baseline,
            )
            return False

        displayed = codec.to_display(color)
        session.form.set_displayed(displayed)
        session.baseline = displayed
        session.form.set_submit_enabled(False)
        _LOGGER.debug("Applied remote color %s", codec.encode(color))
        return True

    def on_frame(self, text: str) -> bool:
        """Decode an inbound text frame and apply it."""
        result = codec.decode_wire(text)
        if not result.ok or result.color is None:
            _LOGGER.warning("Discarding malformed fixture message: %s", result.error)
            return False
        return self.on_remote_message(result.color)
