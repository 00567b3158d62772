"""Check a single invitation URL from the command line."""

import asyncio
import json
import sys
from typing import Sequence

from aiohttp import ClientSession
from configargparse import ArgumentParser

from ..config import argparse as arg
from ..config.base import BaseSettings
from ..config.settings import Settings
from ..config.util import common_config
from ..core.error import InvitationError
from ..invitations.locator import InvitationLocator
from ..invitations.parser import InvitationParser

from . import PROG


async def check_url(url: str, settings: BaseSettings) -> int:
    """Resolve the URL, print the outcome and return the exit status."""
    async with ClientSession(trust_env=True) as session:
        locator = InvitationLocator(
            session,
            request_timeout=settings.get_int(
                "invitations.request_timeout", default=arg.DEFAULT_INVITATION_TIMEOUT
            ),
        )
        try:
            result = await InvitationParser(locator).check_invitation(url)
        except InvitationError as err:
            print(err.message, file=sys.stderr)
            return 1

    if not result:
        print("No usable invitation found", file=sys.stderr)
        return 1
    print(json.dumps(result.serialize(), indent=2))
    return 0


def init_argument_parser(parser: ArgumentParser):
    """Initialize an argument parser with the module's arguments."""
    parser.add_argument(
        "url",
        type=str,
        metavar="<invitation-url>",
        help="Invitation URL, as scanned from a QR code or clicked from a link",
    )
    return arg.load_argument_groups(parser, *arg.group.get_registered(arg.CAT_CHECK))


def execute(argv: Sequence[str] = None):
    """Entrypoint."""
    parser = arg.create_argument_parser(prog=PROG)
    parser.prog += " check"
    get_settings = init_argument_parser(parser)
    args = parser.parse_args(argv)
    settings = Settings(get_settings(args))
    common_config(settings)

    sys.exit(asyncio.run(check_url(args.url, settings)))


def main():
    """Execute the main line."""
    if __name__ == "__main__":
        execute()


main()
