#!/usr/bin/env python3
"""rm-compatible trash CLI"""
import argparse
import logging
import sys
from datetime import datetime

from file_trash import __version__
from file_trash.config import load_settings
from file_trash.errors import TrashError
from file_trash.inventory import Inventory
from file_trash.remover import remove
from file_trash.restorer import newest_first, restore
from file_trash.selector import ConsoleSelector
from file_trash.utils import display, human_time

_LOG = logging.getLogger("file_trash.cli")


def cmd_list(inventory, args):
    now = datetime.now().astimezone()
    for rec in newest_first(inventory.records):
        print(f"{human_time(rec.timestamp, now):>16}  {rec.id}  {display(rec.source_path)}")


def cmd_restore(inventory, args):
    dest = restore(inventory, ConsoleSelector())
    print(f"Restored to {display(str(dest))}")


def cmd_remove(inventory, args):
    remove(args.paths, inventory, args.settings.trash_root, force=args.force)


def build_parser():
    parser = argparse.ArgumentParser(prog="file-trash", description="Move files to a restorable trash instead of deleting them")
    parser.add_argument("paths", nargs="*", help="Files or directories to trash")
    parser.add_argument("-b", "--restore", action="store_true", help="Restore deleted file")
    parser.add_argument("--list", action="store_true", help="List trashed files, newest first")
    parser.add_argument("--trash-dir", help="Trash directory (default $FILE_TRASH_DIR or ~/.file_trash)")
    parser.add_argument("--version", action="store_true", help="Show version")

    rm = parser.add_argument_group("rm compatibility")
    rm.add_argument("-f", dest="force", action="store_true", help="Ignore nonexistent files and failed moves")
    rm.add_argument("-i", dest="interactive", action="store_true", help="Accepted for rm compatibility, ignored")
    rm.add_argument("-r", "-R", dest="recursive", action="store_true", help="Accepted for rm compatibility, ignored")
    rm.add_argument("-d", dest="directory", action="store_true", help="Accepted for rm compatibility, ignored")
    rm.add_argument("-v", dest="verbose", action="store_true", help="Accepted for rm compatibility, ignored")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    # argparse exits with status 2 on bad arguments
    args = parser.parse_args(argv)
    if args.version:
        print(__version__)
        return 0

    settings = load_settings(args.trash_dir)
    args.settings = settings
    logging.basicConfig(level=settings.log_level, stream=sys.stderr, format="[%(levelname)s] %(name)s: %(message)s")
    _LOG.info("trash root: %s", settings.trash_root)
    _LOG.info("inventory: %s", settings.inventory_path)
    _LOG.info("args: %s", args.paths)

    inventory = Inventory(settings.inventory_path).open()
    if args.restore:
        func = cmd_restore
    elif args.list:
        func = cmd_list
    else:
        func = cmd_remove
    try:
        func(inventory, args)
    except TrashError as e:
        print(display(str(e)), file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("interrupted", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
