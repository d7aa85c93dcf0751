"""RGBW fixture color sync client package.

Keeps a local color form synchronized with a remote RGBW light fixture
over a persistent websocket connection:
- Hex color codec and typed wire decoding
- Connection target discovery
- Reconnecting connection manager
- Echo suppression for in-progress local edits
"""

__version__ = "0.1.0"
