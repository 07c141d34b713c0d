"""
Command line entry point for SplitDiff.

This module handles:
- Command line argument parsing
- Logging configuration
- Settings loading
- Reading both inputs and printing the side-by-side diff

Exit status follows diff(1): 0 when the inputs are identical, 1 when they
differ, 2 on errors.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, TextIO

from splitdiff import __version__
from splitdiff.core.display.formatter import SideBySideFormatter
from splitdiff.core.session import DiffSession
from splitdiff.services.file_io import FileIOService, ReadResult
from splitdiff.services.settings import ApplicationSettings, DiffStyle, SettingsManager


# =============================================================================
# Constants
# =============================================================================

APP_NAME = "splitdiff"

EXIT_IDENTICAL = 0
EXIT_DIFFERENT = 1
EXIT_ERROR = 2


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class CommandLineArgs:
    """Parsed command line arguments."""
    left_path: Optional[str] = None
    right_path: Optional[str] = None
    ignore_whitespace: Optional[bool] = None
    collapse: Optional[bool] = None
    context: Optional[int] = None
    search: Optional[str] = None
    hunks_only: bool = False
    width: Optional[int] = None
    no_color: bool = False
    config_file: Optional[str] = None
    log_level: str = "WARNING"


# =============================================================================
# Logging Setup
# =============================================================================

class LogFormatter(logging.Formatter):
    """Custom log formatter with colors for console."""

    COLORS = {
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True, stream: Optional[TextIO] = None):
        super().__init__(
            fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        stream = stream or sys.stderr
        self.use_colors = use_colors and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelno, '')
            return f"{color}{formatted}{self.RESET}"

        return formatted


def setup_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configure application logging.

    Diff output goes to stdout, so log records go to stderr.

    Args:
        level: Log level string
        log_file: Optional file path for logging

    Returns:
        Root logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(LogFormatter(use_colors=True, stream=sys.stderr))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(LogFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    # Reduce noise from third-party libraries
    logging.getLogger('chardet').setLevel(logging.WARNING)

    return root_logger


# =============================================================================
# Command Line Parsing
# =============================================================================

def parse_arguments(args: Optional[List[str]] = None) -> CommandLineArgs:
    """
    Parse command line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Side-by-side line diff with hunks and folding",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s old.txt new.txt                Compare two files
  %(prog)s -w old.txt new.txt             Ignore whitespace differences
  %(prog)s --no-collapse old.txt new.txt  Show every unchanged line
  %(prog)s --hunks old.txt new.txt        List hunks only
        """
    )

    parser.add_argument('left', help='Left (original) file')
    parser.add_argument('right', help='Right (modified) file')

    # Comparison options
    parser.add_argument(
        '-w', '--ignore-whitespace',
        action='store_true',
        default=None,
        help='Ignore all whitespace when matching lines'
    )
    collapse_group = parser.add_mutually_exclusive_group()
    collapse_group.add_argument(
        '--collapse',
        dest='collapse',
        action='store_true',
        default=None,
        help='Fold long runs of unchanged lines'
    )
    collapse_group.add_argument(
        '--no-collapse',
        dest='collapse',
        action='store_false',
        help='Show all unchanged lines'
    )
    parser.add_argument(
        '-C', '--context',
        type=int,
        default=None,
        help='Unchanged lines kept visible around each fold'
    )

    # Output options
    parser.add_argument(
        '-s', '--search',
        help='Mark rows containing this text (case-insensitive)'
    )
    parser.add_argument(
        '--hunks',
        action='store_true',
        help='List hunks instead of printing rows'
    )
    parser.add_argument(
        '--width',
        type=int,
        default=None,
        help='Total output width'
    )
    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable ANSI colors'
    )

    # Configuration
    parser.add_argument(
        '-c', '--config',
        help='Configuration file path'
    )

    # Logging
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='WARNING',
        help='Log level'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'{APP_NAME} {__version__}'
    )

    parsed = parser.parse_args(args)

    if parsed.context is not None and parsed.context < 0:
        parser.error("--context must be non-negative")

    return CommandLineArgs(
        left_path=parsed.left,
        right_path=parsed.right,
        ignore_whitespace=parsed.ignore_whitespace,
        collapse=parsed.collapse,
        context=parsed.context,
        search=parsed.search,
        hunks_only=parsed.hunks,
        width=parsed.width,
        no_color=parsed.no_color,
        config_file=parsed.config,
        log_level='DEBUG' if parsed.verbose else parsed.log_level,
    )


# =============================================================================
# Comparison
# =============================================================================

def load_settings(args: CommandLineArgs) -> ApplicationSettings:
    """Load settings and apply command line overrides."""
    manager = SettingsManager(Path(args.config_file) if args.config_file else None)
    settings = manager.settings

    if args.ignore_whitespace is not None:
        settings.comparison.ignore_whitespace = args.ignore_whitespace
    if args.collapse is not None:
        settings.comparison.collapse_unchanged = args.collapse
    if args.context is not None:
        settings.comparison.context_lines = args.context
    if args.width is not None:
        settings.display.width = args.width
    if args.no_color:
        settings.display.use_colors = False
    if args.hunks_only:
        settings.display.diff_style = DiffStyle.HUNKS_ONLY

    return settings


def read_input(service: FileIOService, path: str) -> ReadResult:
    result = service.read_file(path)
    if not result.success:
        logging.error(f"Cannot read {path}: {result.error}")
    else:
        logging.debug(
            f"Read {path}: {result.content.size} bytes, {result.content.encoding}, "
            f"{result.content.line_ending.name} line endings"
        )
    return result


def run(args: CommandLineArgs, out: Optional[TextIO] = None) -> int:
    """
    Compare the two files named in args and print the result.

    Returns:
        Exit code
    """
    out = out or sys.stdout
    settings = load_settings(args)

    service = FileIOService()
    left = read_input(service, args.left_path)
    right = read_input(service, args.right_path)
    if not (left.success and right.success):
        return EXIT_ERROR

    session = DiffSession(
        left_text=left.text,
        right_text=right.text,
        ignore_whitespace=settings.comparison.ignore_whitespace,
        collapse_unchanged=settings.comparison.collapse_unchanged,
        context=settings.comparison.context_lines,
        left_name=args.left_path,
        right_name=args.right_path,
    )

    display = settings.display
    formatter = SideBySideFormatter(
        width=display.width,
        tab_size=display.tab_size,
        show_line_numbers=display.show_line_numbers,
        use_colors=display.use_colors and out.isatty(),
    )

    active_rows = session.set_search_query(args.search) if args.search else None

    out.write(f"--- {session.left_name}\n+++ {session.right_name}\n")
    if display.diff_style == DiffStyle.HUNKS_ONLY:
        if session.hunks:
            out.write(formatter.format_hunk_list(session.hunks) + "\n")
    else:
        rendered = formatter.render(session.plan, active_rows)
        if rendered:
            out.write(rendered + "\n")

    out.write(session.summary_text + "\n")
    out.write(session.hunk_status + "\n")
    if args.search:
        out.write(f"Search '{args.search}': {session.search_status}\n")

    if session.computation.is_identical:
        return EXIT_IDENTICAL
    return EXIT_DIFFERENT


# =============================================================================
# Main Function
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """
    Application main entry point.

    Returns:
        Exit code
    """
    args = parse_arguments(argv)
    logger = setup_logging(args.log_level)
    logger.debug(f"Starting {APP_NAME} v{__version__}")

    try:
        return run(args)
    except BrokenPipeError:
        # Output piped into a closed reader, e.g. `| head`
        return EXIT_ERROR
    except Exception as e:
        logger.critical(f"Fatal error: {e}", exc_info=True)
        return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
