"""Outbound color submission."""
from __future__ import annotations

import logging

from rgbwsync import codec
from rgbwsync.codec import ColorValue
from rgbwsync.errors import ColorDecodeError
from rgbwsync.session import SubmitEvent, SyncSession

_LOGGER = logging.getLogger(__name__)


class SubmitController:
    """Turn form submissions into wire messages."""

    def __init__(self, session: SyncSession) -> None:
        self._session = session

    def current_color(self) -> ColorValue:
        """Combine the chromatic and white controls into one color.

        Raises ColorDecodeError if either control holds a malformed value.
        """
        form = self._session.form
        white = codec.white_from_display(form.white)
        return codec.decode(form.displayed).with_white(white)

    async def on_submit(self, event: SubmitEvent) -> ColorValue | None:
        """Send the current form color and record it as the new baseline.

        Returns the color sent, or None when nothing went out.
        """
        event.prevent_default()
        session = self._session
        submitted = session.form.displayed
        try:
            color = self.current_color()
        except ColorDecodeError as err:
            _LOGGER.warning("Not submitting malformed color: %s", err)
            return None

        if not await session.send(codec.encode_wire(color)):
            return None

        # the control may have been edited while the send was in flight
        session.baseline = submitted
        session.form.set_submit_enabled(session.form.displayed != submitted)
        _LOGGER.debug("Submitted color %s", codec.encode(color))
        return color
