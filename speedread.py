#!/usr/bin/env python3
"""
speedread — Read PDF and EPUB documents one word at a time (RSVP).

Supported input formats: EPUB, PDF

Quick start:
  1. python speedread.py book.epub --dry-run
  2. python speedread.py book.epub --wpm 350
  3. python speedread.py paper.pdf --wpm 400 --save-wpm

While reading, type a command and press Enter:
  p  pause     r  resume     q  stop   (Ctrl+C also stops)
"""

import argparse
import asyncio
import signal
import sys
import time
from pathlib import Path

from tqdm import tqdm


def format_duration(total_ms: int) -> str:
    """Format milliseconds as H:MM:SS."""
    total_s = int(total_ms) // 1000
    h, rem = divmod(total_s, 3600)
    m, s = divmod(rem, 60)
    return f"{h}:{m:02d}:{s:02d}"


def parse_args(argv=None) -> argparse.Namespace:
    from settings import MAX_WPM, MIN_WPM

    parser = argparse.ArgumentParser(
        description="Speed-read PDF and EPUB documents with rapid serial visual presentation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show title, word count and reading time without playing:
  python speedread.py book.epub --dry-run

  # Read at 450 words per minute:
  python speedread.py paper.pdf --wpm 450

  # A file without a useful extension:
  python speedread.py download.bin --format pdf

  # Make 400 wpm the default for future runs:
  python speedread.py book.epub --wpm 400 --save-wpm
        """,
    )
    parser.add_argument("input_path", type=Path, help="Path to a PDF or EPUB file")
    parser.add_argument(
        "--format", choices=["pdf", "epub"], default=None, dest="doc_format",
        help="Document format (default: detected from the file extension)",
    )
    parser.add_argument(
        "--wpm", type=int, default=None, metavar="N",
        help=f"Words per minute, {MIN_WPM}-{MAX_WPM} (default: SPEEDREAD_WPM from .env, else 300)",
    )
    parser.add_argument(
        "--save-wpm", action="store_true", default=False,
        help="Store --wpm in .env as the default rate",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Extract the document and print a summary without playing it",
    )
    args = parser.parse_args(argv)
    if args.wpm is not None and not MIN_WPM <= args.wpm <= MAX_WPM:
        parser.error(f"--wpm must be between {MIN_WPM} and {MAX_WPM}")
    if args.save_wpm and args.wpm is None:
        parser.error("--save-wpm requires --wpm")
    return args


def print_document_summary(metadata, words, wpm: int) -> None:
    print(f"Title:  {metadata.title}")
    print(f"Author: {metadata.author}")
    print(f"Format: {metadata.source_format}")
    print("-" * 70)
    reading_ms = len(words) * 60000 / wpm
    print(f"  {len(words):,} words | {wpm} wpm | ~{format_duration(reading_ms)} reading time")
    print("-" * 70)
    print()


def _install_controls(loop, player, session) -> list:
    """Hook Ctrl+C and stdin commands up to the player. Returns undo callables."""
    undo = []
    try:
        loop.add_signal_handler(signal.SIGINT, player.stop, session)
        undo.append(lambda: loop.remove_signal_handler(signal.SIGINT))
    except (NotImplementedError, RuntimeError):
        pass

    if not sys.stdin.isatty():
        return undo

    commands = {"p": player.pause, "r": player.resume, "q": player.stop}

    def on_input():
        command = sys.stdin.readline().strip().lower()
        action = commands.get(command[:1])
        if action:
            action(session)

    try:
        loop.add_reader(sys.stdin, on_input)
        undo.append(lambda: loop.remove_reader(sys.stdin))
    except (NotImplementedError, RuntimeError):
        pass
    return undo


async def run_session(words, wpm: int, controls: bool = True):
    """Play words in the terminal. Returns the finished PlaybackSession."""
    from models import PlaybackSession, PlaybackStatus
    from player import RSVPPlayer

    session = PlaybackSession(words=words, wpm=wpm)

    with tqdm(total=session.total, unit="word", leave=True,
              bar_format="{desc:<24} |{bar}| {n_fmt}/{total_fmt} [{remaining}]") as pbar:

        def show_word(word, index, total):
            pbar.set_description_str(word[:24], refresh=False)
            pbar.update(1)

        def show_status(s):
            if s.status is PlaybackStatus.PAUSED:
                pbar.set_postfix_str("paused")
            elif s.status is PlaybackStatus.RUNNING:
                pbar.set_postfix_str("")

        player = RSVPPlayer(on_word=show_word, on_status=show_status)
        undo = _install_controls(asyncio.get_running_loop(), player, session) if controls else []
        try:
            await player.play(session)
        finally:
            for fn in undo:
                fn()

    return session


def main(argv=None):
    args = parse_args(argv)

    # Import parsers and player lazily to keep --help fast
    from errors import SpeedReadError
    from parsers import parse_file
    from parsers.base import tokenize
    from settings import load_default_wpm, save_default_wpm

    wpm = args.wpm or load_default_wpm()
    if args.save_wpm:
        save_default_wpm(wpm)

    print(f"Loading: {args.input_path}")
    try:
        result = parse_file(args.input_path, args.doc_format)
    except SpeedReadError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    words = tokenize(result.text)
    print_document_summary(result.metadata, words, wpm)

    if not words:
        print("ERROR: No readable text found in document.")
        sys.exit(1)

    if args.dry_run:
        print("Dry run complete.")
        return

    print("File loaded. Ready to start.")
    print("Commands: p + Enter to pause, r + Enter to resume, q + Enter or Ctrl+C to stop\n")

    started = time.monotonic()
    session = asyncio.run(run_session(words, wpm))
    elapsed_ms = (time.monotonic() - started) * 1000

    print(f"\n{session.status.value.capitalize()}: {session.index:,} of {session.total:,} words "
          f"in {format_duration(elapsed_ms)}")


if __name__ == "__main__":
    main()
