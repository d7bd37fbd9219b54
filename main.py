import argparse
import sys
from pathlib import Path
from typing import List, Optional

from foldersort.config import read_categories
from foldersort.errors import CollectError, InvalidPathError
from foldersort.logger import log_result, setup_logging
from foldersort.mover import SafeMover, summarize
from foldersort.scanner import FolderScanner
from foldersort.utils import resolve_root


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="foldersort",
        description="Sort the files of a folder into category subfolders by extension.",
        epilog='Example: python main.py --dir "~/Downloads" --dry-run --subdirs',
    )
    parser.add_argument("--dir", help="Folder to organize (required unless --gui).")
    parser.add_argument("--dry-run", action="store_true",
                        help="Only show what would be moved.")
    parser.add_argument("--config", default="",
                        help="Optional JSON file mapping extensions to folder names.")
    parser.add_argument("--subdirs", action="store_true",
                        help="Also scan subfolders (category folders are skipped).")
    parser.add_argument("--log", default="organizer.log",
                        help="Log file, written alongside stdout (default: organizer.log).")
    parser.add_argument("--gui", action="store_true", help="Start the desktop window.")
    return parser


def organize_flow(args: argparse.Namespace) -> int:
    try:
        root = resolve_root(args.dir)
    except InvalidPathError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        logger = setup_logging(Path(args.log) if args.log else None)
    except OSError as e:
        print(f"Error: cannot open log file: {e}", file=sys.stderr)
        return 1

    logger.info("Started")
    logger.info("Folder: %s, Dry run: %s, Subfolders: %s, Config: %s",
                root, args.dry_run, args.subdirs, args.config or "<defaults>")

    config_path = Path(args.config).expanduser() if args.config else None
    table, cat_err = read_categories(config_path)
    if cat_err:
        logger.warning("Could not read category file, using defaults: %s", cat_err)

    scanner = FolderScanner(root, recursive=args.subdirs, managed_folders=table.managed_folders)
    try:
        files = scanner.scan()
    except CollectError as e:
        logger.error("Could not collect files: %s", e)
        return 1

    if args.log:
        # never move our own log file
        log_file = Path(args.log).resolve()
        files = [f for f in files if (root / f.rel_path) != log_file]

    if not files:
        logger.info("No files to organize.")
        return 0
    logger.info("Found %d files.", len(files))

    mover = SafeMover(root, table, dry_run=args.dry_run)
    results = []
    for res in mover.iter_moves(files):
        log_result(logger, res)
        results.append(res)

    counts = summarize(results)
    done = counts.get("planned", 0) if args.dry_run else counts.get("moved", 0)
    verb = "planned" if args.dry_run else "moved"
    logger.info("Done. %d %s, %d errors.", done, verb, counts.get("failed", 0))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.gui:
        from gui import FolderSortGUI

        setup_logging(None)
        app = FolderSortGUI(initial_dir=args.dir or "", initial_config=args.config)
        app.mainloop()
        return 0

    if not args.dir:
        parser.error("--dir is required")
    return organize_flow(args)


if __name__ == "__main__":
    sys.exit(main())
