# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the ArchSync command-line interface."""

import argparse
import sys
from pathlib import Path

from archsync.errors import ArchSyncError
from archsync.log import setup_logging
from archsync.workspace.config import CONFIG_FILE_NAME, load_sync_config
from archsync.workspace.document import read_workspace

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the ArchSync CLI."""
    parser = argparse.ArgumentParser(
        prog="archsync",
        description="ArchSync: architecture workspaces synchronized with a remote store",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check a workspace document",
        description="Decode a workspace document and report validation findings.",
    )
    check_parser.add_argument("document", help="Path to the workspace JSON document")

    # push subcommand
    push_parser = subparsers.add_parser(
        "push",
        help="Upload a workspace document to the remote store",
        description=(
            "Upload a workspace document as the next revision of the configured remote "
            "workspace, keeping remote layout unless --no-merge is given."
        ),
    )
    push_parser.add_argument("document", help="Path to the workspace JSON document")
    push_parser.add_argument(
        "--config",
        default=CONFIG_FILE_NAME,
        help=f"Path to the sync configuration file (default: {CONFIG_FILE_NAME})",
    )
    push_parser.add_argument(
        "--no-merge",
        action="store_true",
        help="Replace the remote workspace without keeping its layout",
    )

    # pull subcommand
    pull_parser = subparsers.add_parser(
        "pull",
        help="Download the remote workspace document",
        description="Fetch the configured remote workspace and write it to a local file.",
    )
    pull_parser.add_argument("output", help="Destination path for the workspace JSON document")
    pull_parser.add_argument(
        "--config",
        default=CONFIG_FILE_NAME,
        help=f"Path to the sync configuration file (default: {CONFIG_FILE_NAME})",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    setup_logging(args.log_level)
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    try:
        if args.command == "check":
            return _cmd_check(args)
        if args.command == "push":
            return _cmd_push(args)
        if args.command == "pull":
            return _cmd_pull(args)
    except ArchSyncError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    from archsync.validation.checks import validate

    workspace = read_workspace(Path(args.document))
    result = validate(workspace)
    for warning in result.warnings:
        print(f"Warning: {warning.message}")
    for error in result.errors:
        print(f"Error: {error.message}", file=sys.stderr)

    if result.has_errors:
        return 1

    print(f"Workspace '{workspace.name}': {len(workspace.views.views)} view(s), no errors found.")
    return 0


def _cmd_push(args: argparse.Namespace) -> int:
    """Handle the push subcommand."""
    from archsync.sync.client import SyncClient

    workspace = read_workspace(Path(args.document))
    config = load_sync_config(Path(args.config))
    client = SyncClient.from_config(config)
    if args.no_merge:
        client.merge_from_remote = False

    revision = client.upload(config.workspace_id, workspace)
    print(f"Uploaded workspace '{workspace.name}' to {config.workspace_id} as revision {revision}.")
    return 0


def _cmd_pull(args: argparse.Namespace) -> int:
    """Handle the pull subcommand."""
    from archsync.sync.client import SyncClient
    from archsync.workspace.document import write_workspace

    config = load_sync_config(Path(args.config))
    client = SyncClient.from_config(config)
    workspace = client.fetch(config.workspace_id)
    if workspace is None:
        print(f"No remote workspace stored under {config.workspace_id}. Nothing to pull.")
        return 0

    output = Path(args.output)
    write_workspace(workspace, output)
    print(f"Pulled revision {workspace.revision} of {config.workspace_id} to '{output}'.")
    return 0
