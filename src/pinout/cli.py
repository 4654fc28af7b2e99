import argparse
import logging
import sys
from pathlib import Path

from pinout.exceptions import NetlistError
from pinout.formatter import Language, get_generator
from pinout.parser import parse_netlist

logger = logging.getLogger("pinout")

EXAMPLES = """\
Examples:
  pinout board.net U1 -o pins.h -L c          C header for U1
  pinout board.net u3 -o pins.hpp -L cpp      references are case-insensitive
  pinout board.net U1 -o pins.h -L c -v       show debug output
"""


def _language(text: str) -> Language:
    try:
        return Language.parse(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _report(exc: BaseException) -> None:
    print(f"error: {exc}", file=sys.stderr)
    cause = exc.__cause__
    while cause is not None:
        print(f"  caused by: {cause}", file=sys.stderr)
        cause = cause.__cause__


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="pinout",
        description="Synchronize your pinouts between firmware and electrical designs.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("netlist", type=Path, help="Path to KiCad .net netlist file")
    parser.add_argument("reference", help="Reference of the component to generate constants for")
    parser.add_argument(
        "-o", "--output-file", type=Path, required=True, help="File to write generated constants to"
    )
    parser.add_argument(
        "-L",
        "--language",
        type=_language,
        required=True,
        metavar="{c,cpp,rust}",
        help="Language to generate constants in",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )

    try:
        logger.info("Loading netlist %s", args.netlist)
        netlist = parse_netlist(args.netlist)
        sheet = netlist.sheet
        logger.info("Found sheet `%s` %s by %s", sheet.title, sheet.rev, sheet.company)

        component = netlist.find_component(args.reference)
        if component is None:
            logger.error("Could not find component with ref %s", args.reference)
            sys.exit(1)
        logger.info("Found component with ref %s: %s", component.reference, component.value)

        generator = get_generator(args.language)
        logger.info("Generating %s file `%s`", args.language, args.output_file)
        header = generator(sheet, component)
    except (NetlistError, OSError) as exc:
        _report(exc)
        sys.exit(1)

    try:
        args.output_file.write_text(header, encoding="utf-8")
    except OSError as exc:
        _report(exc)
        sys.exit(1)

    logger.info("Done")


if __name__ == "__main__":
    main()
