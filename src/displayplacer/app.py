"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging

from . import __author__, __url__, __version__
from .backend import DisplayBackend, DisplayError, detect_backend, screens
from .models import ParseError, ScreenConfig
from .placer import apply_configs
from .profile import PROGRAM, format_listing
from .utils import setup_logging

log = logging.getLogger(__name__)

HELP_TEXT = f"""\
Usage:
    Show current screen info and possible resolutions: {PROGRAM} list

    Screen config: {PROGRAM} "id:<screenId> res:<width>x<height>x<hz> scaling:<on/off> origin:(<x>,<y>) degree:<0/90/180/270>"

    Screen config using mode: {PROGRAM} "id:<screenId> mode:<modeNum> origin:(<x>,<y>) degree:<0/90/180/270>"

    Set layout with a mirrored screen: {PROGRAM} "id:<mainScreenId>+<mirrorScreenId>+<mirrorScreenId> res:<width>x<height>x<hz> scaling:<on/off> origin:(<x>,<y>) degree:<0/90/180/270>"

    Example w/ all features: {PROGRAM} "id:69731906+862792382 res:1440x900 scaling:on origin:(0,0) degree:0" "id:374164677 res:768x1360x60 scaling:off origin:(1440,0) degree:90" "id:173529877 mode:3 origin:(-1440,0) degree:270"

Options:
    -h, --help       Show this help and exit.
    --version        Show version information and exit.
    -v, --verbose    Log every step while applying a configuration.
    Options may appear anywhere on the command line and are spelled out in full.

Instructions:
    1. Manually set rotations 1st*, resolutions 2nd, and arrangement 3rd. For extra resolutions and rotations read 'Notes' below.
        - Open System Preferences -> Displays
        - Choose desired screen rotations (use {PROGRAM} for rotating internal MacBook screen).
        - Choose desired resolutions (use {PROGRAM} for extra resolutions).
        - Drag the white bar to your desired primary screen.
        - Arrange screens as desired and/or enable mirroring.
        - To enable partial mirroring hold the alt/option key and drag a display on top of another.
    2. Use `{PROGRAM} list` to print your current layout's args so you can create profiles for scripting/hotkeys with Automator, BetterTouchTool, etc.

Notes:
    - *`{PROGRAM} list` and system prefs only show resolutions for the screen's current rotation.
    - ScreenIDs change when cables are plugged into different ports. To ensure screenIDs match your saved profiles, always plug cables into the same ports.
    - Use an extra resolution shown in `{PROGRAM} list` by executing `{PROGRAM} "id:<screenId> mode:<modeNum>"`
    - Rotate your internal MacBook screen by executing `{PROGRAM} "id:<screenId> degree:<0/90/180/270>"`
    - The screen set to origin (0,0) will be set as the primary screen (white bar in system prefs).
    - The first screenId in a mirroring set will be the 'Optimize for' screen in the system prefs. You can only choose resolutions for the 'Optimize for' screen. If there is a mirroring resolution you need but cannot find, try making a different screenId the first of the set."""


def version_text() -> str:
    return (
        f"{PROGRAM} v{__version__}\n"
        "\n"
        f"Developer: {__author__}\n"
        f"GitHub: {__url__}"
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROGRAM, add_help=False, allow_abbrev=False)
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("--version", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("screens", nargs="*")
    return parser


def list_screens(backend: DisplayBackend) -> int:
    print(format_listing(screens(backend)))
    return 0


def apply(backend: DisplayBackend | None, configs: list[ScreenConfig]) -> int:
    if backend is None:
        backend = detect_backend()
    return 0 if apply_configs(backend, configs) else 1


def main(argv: list[str] | None = None, backend: DisplayBackend | None = None) -> int:
    """Run the CLI.  Returns the process exit status."""
    args, unknown = _build_parser().parse_known_args(argv)
    setup_logging(args.verbose)

    if unknown:
        log.error("Unrecognized option: %s", " ".join(unknown))
        return 1

    if args.help or (not args.screens and not args.version):
        print(HELP_TEXT)
        return 0

    if args.version:
        print(version_text())
        return 0

    try:
        if args.screens[0] == "list":
            return list_screens(backend or detect_backend())

        # Every argument is parsed before the platform is touched
        try:
            configs = [ScreenConfig.from_arg(arg) for arg in args.screens]
        except ParseError as e:
            log.error("Argument parsing error: %s", e)
            return 1
        return apply(backend, configs)
    except DisplayError as e:
        log.error("%s", e)
        return 1
