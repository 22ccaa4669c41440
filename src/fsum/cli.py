#!/usr/bin/env python3
"""
fsum CLI — Command line interface for checksum indexes.
Builds .fsum indexes of directory trees, derives duplicate/distinct/unique
indexes from them and deletes files listed in an index.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from dataclasses import dataclass
from typing import Callable, Optional, NoReturn, Sequence
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    from send2trash import send2trash
except ImportError:
    _MISSING_DEPS.append("send2trash")

try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    print("\nOr install the package with its dependencies:", file=sys.stderr)
    print("   pip install fsum", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from fsum.core.errors import FsumError
from fsum.core.hasher import supported_algorithms
from fsum.core.models import ActionMode, ActionParams, IndexConfig, IndexParams
from fsum.commands import ActionCommand, IndexCommand
from fsum.utils.convert_utils import ConvertUtils
from fsum.aliases import ACTION_ALIASES, ACTION_HELP_TEXT, ALGORITHM_HELP_TEXT, EPILOG_TEXT


class ProgressTracker:
    """Percentage progress on stderr, fed by crawl and deletion callbacks."""

    def __init__(self, stage: str, enabled: bool = True):
        self.stage = stage
        self.enabled = enabled
        self.total = 0
        self.current = 0
        self.iterations = 0
        self._last_percent = -1

    def start(self, total: int) -> None:
        self.total = total
        self.current = 0
        self.iterations = 0
        self._last_percent = -1

    def advance(self, amount: int) -> None:
        self.iterations += 1
        self.current += amount
        percent = ConvertUtils.percentage(self.current, self.total)
        if self.enabled and percent != self._last_percent:
            self._last_percent = percent
            sys.stderr.write(f"\r  [{self.stage}] {percent}% ({self.iterations} files)")
            sys.stderr.flush()

    def finish(self) -> None:
        if self.enabled and self.iterations:
            sys.stderr.write("\n")
            sys.stderr.flush()


@dataclass(frozen=True)
class CommandDescriptor:
    """One CLI command: its name, help, argument setup and handler."""
    name: str
    help: str
    configure: Callable[[argparse.ArgumentParser], None]
    handler: Callable[["CLIApplication", argparse.Namespace], None]


def _add_output_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress non-essential output"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show progress and debug logging"
    )


def _configure_index(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "paths",
        nargs="+",
        metavar="PATH",
        help="Directories to index (one .fsum file per directory)"
    )
    parser.add_argument(
        "--algorithm", "-a",
        choices=supported_algorithms(),
        default=IndexConfig.DEFAULT_ALGORITHM,
        type=str.upper,
        help=ALGORITHM_HELP_TEXT
    )
    parser.add_argument(
        "--output-dir", "-o",
        default=".",
        type=str,
        help="Directory receiving the .fsum files. Default: current directory"
    )
    parser.add_argument(
        "--no-sort",
        action="store_true",
        help="Visit files in raw filesystem order instead of sorted order"
    )
    _add_output_options(parser)


def _configure_action(parser: argparse.ArgumentParser) -> None:
    modes = parser.add_mutually_exclusive_group(required=True)
    for name, mode in ACTION_ALIASES.items():
        modes.add_argument(
            f"--{name}",
            dest="mode",
            action="store_const",
            const=mode,
            help=mode.description
        )
    parser.add_argument(
        "working",
        metavar="WORKING" + IndexConfig.FILE_EXTENSION,
        help="Index the action is applied to"
    )
    parser.add_argument(
        "against",
        nargs="?",
        default=None,
        metavar="AGAINST" + IndexConfig.FILE_EXTENSION,
        help="Second index (baseline, or list of files to delete). Default: WORKING itself"
    )
    parser.add_argument(
        "--output-dir", "-o",
        default=None,
        type=str,
        help="Directory receiving the result .fsum. Default: next to WORKING"
    )
    parser.add_argument(
        "--trash",
        action="store_true",
        help="With --delete: move files to the system trash instead of deleting them"
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Skip confirmation prompt when used with --delete (for automation/scripts)"
    )
    _add_output_options(parser)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self, commands: Optional[Sequence[CommandDescriptor]] = None):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.commands = tuple(commands) if commands is not None else COMMANDS

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    def build_parser(self) -> argparse.ArgumentParser:
        """Build the argument parser from the command table."""
        parser = argparse.ArgumentParser(
            prog="fsum",
            description="fsum — content checksum indexes of directory trees",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )
        subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)
        for descriptor in self.commands:
            subparser = subparsers.add_parser(
                descriptor.name,
                help=descriptor.help,
                description=descriptor.help,
                formatter_class=argparse.RawTextHelpFormatter
            )
            descriptor.configure(subparser)
            subparser.set_defaults(descriptor=descriptor)
        return parser

    def parse_args(self, args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        return self.build_parser().parse_args(args)

    def dispatch(self, args: argparse.Namespace) -> None:
        """Run the handler of the selected command."""
        self.verbose = getattr(args, "verbose", False)
        self.quiet = getattr(args, "quiet", False)
        if self.verbose:
            logging.getLogger("fsum").setLevel(logging.DEBUG)
        args.descriptor.handler(self, args)

    # ===== index =====

    def run_index(self, args: argparse.Namespace) -> None:
        """Crawl every PATH and write one .fsum file per directory."""
        for path in args.paths:
            if not os.path.isdir(path):
                self.error_exit(f"{path} is not a directory")
        if not os.path.isdir(args.output_dir):
            self.error_exit(f"Output directory not found: {args.output_dir}")

        try:
            params = IndexParams(
                root_dirs=list(args.paths),
                algorithm=args.algorithm,
                output_dir=args.output_dir,
                sort_paths=not args.no_sort
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

        progress = ProgressTracker("hashing", enabled=self.verbose)
        if not self.quiet:
            print(f"Indexing {', '.join(params.root_dirs)} ({params.algorithm}). This may take a while ...")

        try:
            results = IndexCommand().execute(
                params,
                on_total_size=progress.start,
                on_file_processed=lambda _path, size: progress.advance(size)
            )
        except (FsumError, OSError) as e:
            self.error_exit(f"Indexing failed: {e}")
        finally:
            progress.finish()

        for result in results:
            if not len(result.index):
                self.warning(f"No readable files found in {result.root}")
        if not self.quiet:
            for result in results:
                size_str = ConvertUtils.bytes_to_human(result.index.total_size())
                print(f"Saving index in {result.output_path} ({len(result.index)} files, {size_str})")

    # ===== action =====

    def run_action(self, args: argparse.Namespace) -> None:
        """Apply --distinct/--duplicate/--unique/--delete to WORKING.fsum."""
        mode: ActionMode = args.mode
        if args.force and mode != ActionMode.DELETE:
            self.error_exit("--force can only be used with --delete")
        if args.trash and mode != ActionMode.DELETE:
            self.error_exit("--trash can only be used with --delete")

        try:
            params = ActionParams(
                mode=mode,
                working_file=args.working,
                against_file=args.against,
                output_dir=args.output_dir,
                use_trash=args.trash
            )
        except ValueError as e:
            self.error_exit(str(e))

        if mode == ActionMode.DELETE and not self.confirm_deletion(params, force=args.force):
            print("Deletion cancelled by user.")
            return

        progress = ProgressTracker("deleting", enabled=self.verbose)
        try:
            result = ActionCommand().execute(
                params,
                on_deleted=lambda _path: progress.advance(1),
                on_error=lambda _path: progress.advance(1),
                on_total=progress.start
            )
        except (FsumError, OSError) as e:
            self.error_exit(f"{mode.display_name} failed: {e}")
        finally:
            progress.finish()

        if result.report is not None:
            self.output_deletion_report(result.report)
        if not self.quiet:
            print(f"Saving index in {result.output_path} ({len(result.index)} files)")

    def confirm_deletion(self, params: ActionParams, force: bool = False) -> bool:
        """Ask before deleting. Returns True when deletion may proceed."""
        action = "move to trash" if params.use_trash else "delete"
        message = f"You are going to {action} files from {params.working_file} listed inside {params.against_file}."

        if force:
            if not self.quiet:
                print(message)
                print("⚠️  WARNING: --force flag skips confirmation. Proceeding with deletion...")
            return True

        # Prevent interactive confirmation in non-TTY environments
        if not sys.stdin.isatty() or not sys.stdout.isatty():
            self.error_exit(
                "Cannot request interactive confirmation in non-interactive session.\n"
                "Use --force flag to proceed without confirmation when piping output or running in scripts."
            )

        response = input(f"{message} Are you sure? [y/N]: ")
        return response.strip().lower() in ("y", "yes")

    def output_deletion_report(self, report) -> None:
        if self.quiet:
            return
        if report.errors:
            print(f"\n⚠️  Partial success: {len(report.deleted)}/{report.processed_count} files removed.")
            print(f"Could not remove {len(report.errors)} file(s):")
            for path in report.errors[:5]:
                print(f"  • {path}")
            if len(report.errors) > 5:
                print(f"  ...and {len(report.errors) - 5} more files")
        else:
            print(f"✅ Successfully removed {len(report.deleted)} files.")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point."""
        args = self.parse_args(argv)
        self.dispatch(args)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")


COMMANDS = (
    CommandDescriptor(
        name="index",
        help="Index directory trees into .fsum files",
        configure=_configure_index,
        handler=CLIApplication.run_index,
    ),
    CommandDescriptor(
        name="action",
        help=ACTION_HELP_TEXT,
        configure=_configure_action,
        handler=CLIApplication.run_action,
    ),
)


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
