"""
mpegpts Command Line Interface

Usage:
    python -m mpegpts compare <a> <b>          # Order two timestamps
    python -m mpegpts duration <from> <to>     # Ticks between two timestamps
    python -m mpegpts add <pts> <offset>       # Offset with 33-bit wrap
    python -m mpegpts sequence <v1> <v2> ...   # Intervals of a PTS sequence

Values are decimal or 0x-prefixed hex tick counts. `compare` also
accepts +inf / -inf (put -- before a -inf argument).

Examples:
    # Sample just after a wrap compared with one just before it
    python -m mpegpts compare 100 8589900000

    # Frame intervals across a wrap, with debug logging
    python -m mpegpts -v sequence 8589930000 8589933000 1408 4408
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from . import __version__
from .PTS import PTS, PTS_CLOCK_FREQ
from .PTSArray import PTSArray


console = Console(highlight=False)


def parse_pts(text: str) -> PTS:
    """
    Parse a command line timestamp.

    Args:
        text: Decimal or 0x-hex tick count, or '+inf' / 'inf' / '-inf'

    Returns:
        PTS value

    Raises:
        ValueError: If text is not a timestamp
    """
    token = text.strip().lower()
    if token in ('+inf', 'inf'):
        return PTS.POSITIVE_INFINITY
    if token == '-inf':
        return PTS.NEGATIVE_INFINITY
    try:
        return PTS(int(token, 0))
    except ValueError:
        raise ValueError(f"Invalid PTS value: {text!r}") from None


def _finite_arg(text: str) -> PTS:
    pts = parse_pts(text)
    if not pts.is_finite:
        raise ValueError(f"Expected a finite PTS, got {text!r}")
    return pts


def _format(pts: PTS) -> str:
    if not pts.is_finite:
        return pts.bound.value
    return f"{pts.value:,} ({pts.to_seconds():.3f}s)"


def _table(title: str) -> Table:
    table = Table(title=title, box=box.SIMPLE, show_header=False, padding=(0, 1))
    table.add_column("Label", style="bold cyan")
    table.add_column("Value")
    return table


def cmd_compare(args: argparse.Namespace) -> int:
    """Show ordering of two timestamps."""
    a = parse_pts(args.a)
    b = parse_pts(args.b)

    table = _table("PTS comparison")
    table.add_row("A", _format(a))
    table.add_row("B", _format(b))
    table.add_row("A after B", str(a.after(b)))
    table.add_row("B after A", str(b.after(a)))
    table.add_row("A >= B", str(a.greater_or_equal(b)))
    table.add_row("A rolled over B", str(a.rolled_over(b)))
    table.add_row("B rolled over A", str(b.rolled_over(a)))
    if a.is_finite and b.is_finite:
        ticks = a.duration_from(b)
        table.add_row("Duration", f"{ticks:,} ticks ({ticks / PTS_CLOCK_FREQ:.3f}s)")

    console.print(table)
    return 0


def cmd_duration(args: argparse.Namespace) -> int:
    """Show the duration between two timestamps."""
    start = _finite_arg(args.start)
    end = _finite_arg(args.end)

    ticks = end.duration_from(start)
    console.print(f"Duration: {ticks:,} ticks ({ticks / PTS_CLOCK_FREQ:.6f}s)")
    if end.rolled_over(start) or start.rolled_over(end):
        console.print("Rollover: yes")
    return 0


def cmd_add(args: argparse.Namespace) -> int:
    """Offset a timestamp."""
    pts = _finite_arg(args.pts)
    offset = int(args.offset, 0)

    result = pts.add(offset)
    console.print(f"Result: {_format(result)}")
    return 0


def cmd_sequence(args: argparse.Namespace) -> int:
    """Show intervals between consecutive timestamps."""
    samples = PTSArray([_finite_arg(v) for v in args.values])
    intervals = samples.intervals()
    wraps = set(samples.rollover_indices().tolist())

    table = Table(title="PTS sequence", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("PTS", justify="right")
    table.add_column("Interval", justify="right")
    table.add_column("Seconds", justify="right")
    table.add_column("Note")

    for i, pts in enumerate(samples):
        if i == 0:
            table.add_row(str(i), f"{pts.value:,}", "", "", "")
            continue
        ticks = int(intervals[i - 1])
        note = ""
        if i in wraps:
            note = "rollover"
        elif not pts.greater_or_equal(samples[i - 1]):
            note = "backward"
        table.add_row(str(i), f"{pts.value:,}", f"{ticks:,}",
                      f"{ticks / PTS_CLOCK_FREQ:.3f}", note)

    console.print(table)
    console.print(f"Monotonic: {samples.is_monotonic()}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog='mpegpts',
        description='mpegpts - Wrap-aware MPEG PTS algebra',
    )
    parser.add_argument('--version', action='version',
                        version=f'mpegpts {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    compare_parser = subparsers.add_parser('compare', help='Order two timestamps')
    compare_parser.add_argument('a', help='First PTS')
    compare_parser.add_argument('b', help='Second PTS')

    duration_parser = subparsers.add_parser('duration', help='Ticks between two timestamps')
    duration_parser.add_argument('start', help='Earlier PTS')
    duration_parser.add_argument('end', help='Later PTS')

    add_parser = subparsers.add_parser('add', help='Offset a timestamp')
    add_parser.add_argument('pts', help='PTS')
    add_parser.add_argument('offset', help='Offset in ticks (may be negative)')

    seq_parser = subparsers.add_parser('sequence', help='Intervals of a PTS sequence')
    seq_parser.add_argument('values', nargs='+', help='PTS values in stream order')

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format='%(levelname)s %(name)s: %(message)s')

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        'compare': cmd_compare,
        'duration': cmd_duration,
        'add': cmd_add,
        'sequence': cmd_sequence,
    }

    try:
        return commands[args.command](args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
