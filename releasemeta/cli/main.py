# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for releasemeta.

Every operation is a subcommand of `releasemeta`. The global options
(--config, --log-level) come from a parent parser shared by all of them.

Usage:
    releasemeta decode release.json
    releasemeta verify release.json --game-version 1.12.2 --loader Forge --resource-root ./install
    releasemeta embed descriptor.json CHANGELOG.md --output body.md
    releasemeta hash install/wdl/WDL.class
    releasemeta info
"""

import argparse
import sys

from releasemeta.cli.commands import (
    handle_decode,
    handle_embed,
    handle_hash,
    handle_info,
    handle_verify,
)
from releasemeta.cli.exit_codes import USER_ERROR


def _build_global_parser(default: object = None) -> argparse.ArgumentParser:
    """
    Parent parser with the options every subcommand inherits.

    The copy handed to subparsers is built with default=argparse.SUPPRESS so
    that a value given before the subcommand isn't reset to None by it.
    """
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--config",
        type=str,
        default=default,
        help="Path to YAML configuration file.",
    )
    parent.add_argument(
        "--log-level",
        type=str,
        default=default,
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (overrides global.log_level from the config).",
    )
    return parent


def _register_subcommands(
    subparsers: argparse._SubParsersAction,  # type: ignore[type-arg]
    parent: argparse.ArgumentParser,
) -> None:
    decode_parser = subparsers.add_parser(
        "decode", parents=[parent], help="Decode a raw release record and its hidden payload."
    )
    decode_parser.add_argument("record", help="JSON file holding one release record.")
    decode_parser.set_defaults(func=handle_decode)

    verify_parser = subparsers.add_parser(
        "verify", parents=[parent], help="Check host compatibility and installed file hashes."
    )
    verify_parser.add_argument("record", help="JSON file holding one release record.")
    verify_parser.add_argument(
        "--game-version",
        dest="env_version",
        default=None,
        help="Version of the running host (overrides environment.version).",
    )
    verify_parser.add_argument(
        "--loader",
        dest="env_loader",
        default=None,
        help="Active loader of the running host (overrides environment.loader).",
    )
    verify_parser.add_argument(
        "--resource-root",
        dest="resource_root",
        default=None,
        help="Directory the declared files are resolved against.",
    )
    verify_parser.add_argument(
        "--algorithm",
        default=None,
        help="Hash algorithm used by the payload producer (default: md5).",
    )
    verify_parser.add_argument(
        "--workers",
        dest="max_workers",
        type=int,
        default=None,
        help="Number of files hashed concurrently.",
    )
    verify_parser.set_defaults(func=handle_verify)

    embed_parser = subparsers.add_parser(
        "embed", parents=[parent], help="Prefix a changelog with a hidden payload."
    )
    embed_parser.add_argument("descriptor", help="JSON file in the payload wire format.")
    embed_parser.add_argument("body", help="Markdown file with the visible changelog.")
    embed_parser.add_argument(
        "--output",
        default=None,
        help="Write the result here instead of stdout.",
    )
    embed_parser.set_defaults(func=handle_embed)

    hash_parser = subparsers.add_parser(
        "hash", parents=[parent], help="Log file digests for a payload's Hash lists."
    )
    hash_parser.add_argument("files", nargs="+", help="Files to hash.")
    hash_parser.add_argument(
        "--algorithm",
        default=None,
        help="Hash algorithm (default: md5).",
    )
    hash_parser.set_defaults(func=handle_hash)

    info_parser = subparsers.add_parser(
        "info", parents=[parent], help="Display package and environment info."
    )
    info_parser.set_defaults(func=handle_info)


def main() -> None:
    """
    Main CLI entrypoint, referenced by [project.scripts] in pyproject.toml.

    With no subcommand, prints help and exits with USER_ERROR.
    """
    root_parser = argparse.ArgumentParser(
        prog="releasemeta",
        description="releasemeta: hidden release metadata decoding and install verification.",
        parents=[_build_global_parser()],
    )
    subparsers = root_parser.add_subparsers(dest="command")
    _register_subcommands(subparsers, _build_global_parser(default=argparse.SUPPRESS))

    args = root_parser.parse_args()

    if not hasattr(args, "func") or args.func is None:
        root_parser.print_help()
        sys.exit(USER_ERROR)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
