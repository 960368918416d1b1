"""CLI for element descriptors: python -m elinfo"""

from __future__ import annotations

import argparse
import logging
import sys

from elinfo._router import detect_platform
from elinfo.errors import ElementInfoError
from elinfo.session import Session


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="elinfo: Describe page elements by XPath, CSS selector and label")
    parser.add_argument("file", nargs="?", default=None,
                        help="HTML file to load (default: live browser over CDP)")
    parser.add_argument("--url", type=str, default=None,
                        help="Document URL to report for an HTML file")
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--ref", type=str, default=None,
                        help="Describe the element with this snapshot ref (e.g. e14)")
    target.add_argument("--selector", type=str, default=None,
                        help="Describe the first element matching this CSS selector")
    parser.add_argument("--detail", type=str, default="standard",
                        choices=["standard", "minimal", "full"],
                        help="Snapshot pruning level")
    parser.add_argument("--platform", type=str, default=None,
                        choices=["html", "web"],
                        help="Force platform (default: html when a file is given)")
    parser.add_argument("--cdp-port", type=int, default=None,
                        help="CDP port for web platform (default: 9222)")
    parser.add_argument("--cdp-host", type=str, default=None,
                        help="CDP host for web platform (default: localhost)")
    parser.add_argument("--json-out", type=str, default=None,
                        help="Write the descriptor JSON to file")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log debug output to stderr")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(levelname)s %(name)s: %(message)s")

    platform = args.platform or detect_platform(args.file)
    if platform == "html":
        if args.file is None:
            parser.error("the html platform needs a FILE")
        options = {"path": args.file, "url": args.url}
    else:
        options = {}
        if args.cdp_host:
            options["host"] = args.cdp_host
        if args.cdp_port:
            options["port"] = args.cdp_port

    try:
        session = Session(platform, **options)
        snapshot = session.capture(detail=args.detail)
        if args.ref is None and args.selector is None:
            print(snapshot, end="")
            return 0
        descriptor = session.describe(args.ref, selector=args.selector)
    except (ElementInfoError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    json_str = descriptor.to_json(indent=2)
    print(json_str)
    if args.json_out:
        with open(args.json_out, "w", encoding="utf-8") as f:
            f.write(json_str + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
