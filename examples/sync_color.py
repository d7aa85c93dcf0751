#!/usr/bin/env python
"""Set an RGBW fixture color and follow its updates over the websocket."""
from __future__ import annotations

import argparse
import asyncio
import logging
import os

from rgbwsync import codec, const
from rgbwsync.client import ColorSyncClient
from rgbwsync.config import ENV_PAGE_URL, SyncConfig
from rgbwsync.errors import RgbwSyncError
from rgbwsync.rest import FixtureRestClient
from rgbwsync.session import ColorForm


async def run(args: argparse.Namespace) -> None:
    """Run the sync example."""
    config = SyncConfig.from_env()
    config.page_url = args.page_url

    initial = args.initial
    if initial is None:
        try:
            async with FixtureRestClient(args.page_url) as rest:
                initial = (await rest.async_get_color()).to_display()
        except (RgbwSyncError, OSError) as err:
            print(f"could not read initial color: {err}")
            initial = "#000000"

    form = ColorForm(initial, args.white)
    updates = asyncio.Queue()
    form.add_listener(lambda f: updates.put_nowait((f.displayed, f.submit_enabled)))

    async with ColorSyncClient(form, config) as client:
        print(f"target: {client.session.target}")
        await client.wait_until_open()
        print("connected")

        if args.color:
            form.input(args.color)
            event = await form.submit()
            if event.default_prevented:
                print(f"submitted {args.color} white={codec.white_from_display(args.white)}")

        count = 0
        while count < args.updates:
            displayed, submit_enabled = await updates.get()
            count += 1
            print(f"update {count}: color={displayed} submit_enabled={submit_enabled}")


def parse_args() -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Set and follow the color of an RGBW fixture."
    )
    parser.add_argument(
        "--page-url",
        default=os.environ.get(ENV_PAGE_URL, const.DEFAULT_PAGE_URL),
        help=f"Fixture page URL (env: {ENV_PAGE_URL})",
    )
    parser.add_argument(
        "--initial",
        default=None,
        help="Initial #rrggbb color (default: read from the fixture REST API)",
    )
    parser.add_argument("--color", help="#rrggbb color to submit once connected")
    parser.add_argument(
        "--white",
        default="#000000",
        help="White control value; the first byte is the white level",
    )
    parser.add_argument(
        "--updates",
        type=int,
        default=10,
        help="Number of form updates to print",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def main() -> None:
    """Entry point."""
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)
    asyncio.run(run(args))


if __name__ == "__main__":
    main()
