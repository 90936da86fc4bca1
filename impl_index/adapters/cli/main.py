"""CLI JSON-lines adapter — simulates page loads over fragment files, prints JSON."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from impl_index import load_settings
from impl_index.bridge.registry import RegistryBridge
from impl_index.fragments.loader import iter_fragments, load_fragment
from impl_index.viewer.index import ImplementorIndex


def run_show(path: str, root: str | None, current_crate: str | None, viewer_first: bool) -> None:
    """Load one fragment into a fresh page, viewer before or after it."""
    fragment = load_fragment(path, root)
    bridge = RegistryBridge()
    index = ImplementorIndex(current_crate=current_crate)
    if viewer_first:
        index.attach(bridge)
        bridge.deposit(fragment.contribution)
    else:
        bridge.deposit(fragment.contribution)
        index.attach(bridge)
    for entry in index.entries:
        print(json.dumps({"trait": fragment.trait_path, **entry.model_dump()}), flush=True)


def run_scan(root: str) -> None:
    for fragment in iter_fragments(root):
        print(json.dumps({
            "trait": fragment.trait_path,
            "groups": list(fragment.contribution),
            "items": fragment.item_count,
        }), flush=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="impl-index", description=__doc__)
    parser.add_argument("-v", "--verbose", action="store_true", help="log at INFO to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="index one fragment as a page load would")
    show.add_argument("fragment")
    show.add_argument("--root", default=None, help="fragment root (for the trait path)")
    show.add_argument("--current-crate", default=None, help="crate the page already lists")
    show.add_argument("--viewer-first", action="store_true",
                      help="register the viewer before the fragment runs")

    scan = sub.add_parser("scan", help="summarize every fragment under a root")
    scan.add_argument("root", nargs="?", default=None)
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.INFO, stream=sys.stderr)
    settings = load_settings(current_crate=getattr(args, "current_crate", None))

    try:
        if args.command == "show":
            run_show(args.fragment, args.root, settings.current_crate, args.viewer_first)
        else:
            run_scan(args.root or settings.fragment_root)
    except (OSError, ValueError) as exc:
        print(f"impl-index: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
