#!/usr/bin/env python3
"""gti - terminal typing trainer."""

import argparse
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from core.challenge_progress import ChallengeProgression, ProgressWriteError
from core.models import SessionMode
from core.quote_client import QuoteClient
from core.session_recorder import HistoryWriteError, SessionRecorder
from core.streaks import summarize_history
from core.typing_session import TypingSession
from core.version import get_version
from core.word_generator import WordGenerator, is_language_supported
from utils.config import Config
from utils.paths import expand_path, state_dir

log = logging.getLogger("gti")


def setup_logging(verbose: bool = False) -> None:
    """Log to a rotating file in the XDG state directory and to stderr."""
    log_dir = state_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    # Configure rotating file handler (5MB max, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_dir / "gti.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
    )
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[file_handler, stream_handler],
        force=True,
    )


def build_target_text(args: argparse.Namespace, config: Config) -> tuple[str, Optional[str]]:
    """Return practice text and quote author (None outside quote mode)."""
    if args.mode == SessionMode.QUOTE.value:
        quotes = QuoteClient(config.settings).fetch_quotes(args.count)
        text = " ".join(q.text for q in quotes)
        authors = ", ".join(dict.fromkeys(q.author for q in quotes))
        return text, authors

    language = args.language or config.settings.language.default
    if not is_language_supported(language):
        log.warning(f"Unsupported language '{language}', using random word list")
    words_dir = config.settings.language.words_dir
    generator = WordGenerator(expand_path(words_dir) if words_dir else None)
    return generator.generate_words(args.count, language), None


def cmd_practice(args: argparse.Namespace, config: Config) -> int:
    target, author = build_target_text(args, config)
    recorder = SessionRecorder(config.settings)
    session = TypingSession(
        target,
        mode=SessionMode(args.mode),
        recorder=recorder,
        quote_author=author,
    )

    print(target)
    if author:
        print(f"  - {author}")
    print()

    session.start()
    try:
        typed = input("> ")
    except (EOFError, KeyboardInterrupt):
        session.abort()
        print("\nSession discarded.")
        return 1

    session.type_text(typed[: len(target)])
    try:
        record = session.complete()
    except HistoryWriteError as e:
        print(f"Warning: session not saved: {e}", file=sys.stderr)
        record = session.record

    print(f"WPM:        {record.wpm:.1f}")
    print(f"Net WPM:    {record.net_wpm:.1f}")
    print(f"Adjusted:   {record.adjusted_wpm:.1f}")
    print(f"CPM:        {record.cpm:.1f}")
    print(f"Accuracy:   {record.accuracy:.1f}%")
    print(f"Mistakes:   {record.mistakes}")
    return 0


def cmd_challenge(args: argparse.Namespace, config: Config) -> int:
    progression = ChallengeProgression(config.config_dir)

    if args.complete is not None:
        if args.complete < 1:
            print(f"Error: level must be 1 or higher, got {args.complete}", file=sys.stderr)
            return 1
        try:
            advanced = progression.complete(args.complete)
        except ProgressWriteError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        if advanced:
            print(f"Level {args.complete} completed.")
        else:
            print(f"Level {args.complete} was already completed.")

    result = progression.load()
    if result.recovered:
        print("Challenge progress could not be read and was reset.", file=sys.stderr)
    print(f"Starting level: {result.progress.highest_level_completed + 1}")
    return 0


def cmd_stats(args: argparse.Namespace, config: Config) -> int:
    if not config.settings.history.enabled:
        print("History tracking is disabled.")
        return 0

    summary = summarize_history(SessionRecorder(config.settings).load())
    print(f"Sessions:        {summary.session_count}")
    print(f"Best net WPM:    {summary.best_wpm:.1f}")
    print(f"Average WPM:     {summary.avg_wpm:.1f}")
    print(f"Average acc.:    {summary.avg_accuracy:.1f}%")
    print(f"Current streak:  {summary.streaks.current} day(s)")
    print(f"Longest streak:  {summary.streaks.longest} day(s)")
    return 0


def cmd_history(args: argparse.Namespace, config: Config) -> int:
    if args.limit < 0:
        print(f"Error: limit must not be negative, got {args.limit}", file=sys.stderr)
        return 1

    records = SessionRecorder(config.settings).load()[: args.limit]
    if not records:
        print("No sessions recorded.")
        return 0

    for record in records:
        when = record.timestamp.astimezone().strftime("%Y-%m-%d %H:%M")
        print(
            f"{when}  {record.mode:<9} {record.net_wpm:6.1f} WPM  "
            f"{record.accuracy:5.1f}%  {record.duration_ms / 1000:.1f}s"
        )
    return 0


def cmd_config(args: argparse.Namespace, config: Config) -> int:
    if args.reset:
        print("Resetting config to defaults...")
        try:
            config.reset()
        except OSError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print("Config reset successfully.")
        return 0

    if args.show:
        print(f"Config file: {config.config_file}\n")
        print(config.describe())
        return 0

    args.parser.print_help()
    return 0


def cmd_version(args: argparse.Namespace, config: Config) -> int:
    print(f"gti {get_version()}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gti", description="Terminal typing trainer")
    parser.add_argument("--config", type=Path, help="Path to config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command")

    practice = subparsers.add_parser("practice", help="Type a quote or random words")
    practice.add_argument(
        "--mode",
        choices=[SessionMode.WORD.value, SessionMode.QUOTE.value],
        default=SessionMode.WORD.value,
    )
    practice.add_argument("-n", "--count", type=int, default=25, help="Words or quotes")
    practice.add_argument("--language", help="Word list language")
    practice.set_defaults(func=cmd_practice)

    challenge = subparsers.add_parser("challenge", help="Show challenge progress")
    challenge.add_argument(
        "--complete", type=int, metavar="LEVEL", help="Record a passed level"
    )
    challenge.set_defaults(func=cmd_challenge)

    stats = subparsers.add_parser("stats", help="Show streaks and averages")
    stats.set_defaults(func=cmd_stats)

    history = subparsers.add_parser("history", help="List recent sessions")
    history.add_argument("-n", "--limit", type=int, default=10)
    history.set_defaults(func=cmd_history)

    config_parser = subparsers.add_parser("config", help="View or reset configuration")
    config_parser.add_argument("--show", action="store_true", help="Display configuration")
    config_parser.add_argument("--reset", action="store_true", help="Reset to defaults")
    config_parser.set_defaults(func=cmd_config, parser=config_parser)

    version = subparsers.add_parser("version", help="Show version")
    version.set_defaults(func=cmd_version)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        return 0

    setup_logging(args.verbose)

    try:
        config = Config(args.config)
        return args.func(args, config)
    except OSError as e:
        log.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
