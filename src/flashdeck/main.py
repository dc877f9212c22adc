"""CLI entrypoint for flashcard study sessions."""

from __future__ import annotations

import argparse
import random
from collections.abc import Callable, Sequence
from pathlib import Path

from .config import configure_logging
from .deck import deck_for_chapter, load_chapter, load_chapters
from .models import Chapter, Flashcard
from .session import StudySession

InputFn = Callable[[str], str]
PrintFn = Callable[[str], None]
MENU_QUIT_COMMANDS = {"q"}
MENU_BACK_COMMANDS = {"b"}
FLIP_COMMANDS = {"", "f"}
CLOSE_COMMANDS = {"q", ":q", ":quit", ":exit"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="flashdeck", description="Study flashcards built from lesson key points")
    parser.add_argument("path", nargs="?", type=Path, help="chapter JSON file (default: pick a bundled chapter)")
    parser.add_argument("--title", help="session title (default: chapter title)")
    parser.add_argument("--shuffle", action="store_true", help="start with shuffled cards")
    parser.add_argument("--seed", type=int, help="seed for the shuffle order")
    parser.add_argument("--verbose", action="store_true", help="log debug events to stderr")
    return parser


def run(argv: list[str] | None = None, input_fn: InputFn = input, print_fn: PrintFn = print) -> int:
    """Run the CLI application."""
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)
    rng = random.Random(args.seed)

    if args.path is not None:
        try:
            chapter = load_chapter(args.path)
        except (OSError, ValueError) as exc:
            print_fn(f"Could not load chapter: {exc}")
            return 2
        return study_chapter(chapter, input_fn, print_fn, title=args.title, shuffle=args.shuffle, rng=rng)

    chapters = load_chapters()
    while True:
        chapter = _select_chapter(chapters, input_fn, print_fn)
        if chapter is None:
            return 0
        study_chapter(chapter, input_fn, print_fn, title=args.title, shuffle=args.shuffle, rng=rng)


def _select_chapter(chapters: dict[str, Chapter], input_fn: InputFn, print_fn: PrintFn) -> Chapter | None:
    """Pick one chapter from a numbered menu."""
    ordered = sorted(chapters.values(), key=lambda item: item.id)
    while True:
        print_fn("\n=== Chapters ===")
        if not ordered:
            print_fn("No chapters available.")
        for idx, chapter in enumerate(ordered, start=1):
            card_count = sum(len(section.key_points) for section in chapter.sections)
            print_fn(f"{idx}) {chapter.title} ({card_count} cards)")
        print_fn("q) Quit")

        choice = input_fn("Choose chapter: ").strip().lower()
        if choice in MENU_QUIT_COMMANDS or choice in MENU_BACK_COMMANDS:
            return None
        if choice.isdigit():
            index = int(choice) - 1
            if 0 <= index < len(ordered):
                return ordered[index]
        print_fn("Invalid choice.")


def study_chapter(
    chapter: Chapter,
    input_fn: InputFn,
    print_fn: PrintFn,
    *,
    title: str | None = None,
    shuffle: bool = False,
    rng: random.Random | None = None,
) -> int:
    """Open a study session over a chapter's key points."""
    deck = deck_for_chapter(chapter)
    if not deck:
        print_fn(f"No flashcards available for {chapter.title}.")
        return 1
    return study_deck(deck, input_fn, print_fn, title=title or chapter.title, shuffle=shuffle, rng=rng)


def study_deck(
    deck: Sequence[Flashcard],
    input_fn: InputFn,
    print_fn: PrintFn,
    *,
    title: str,
    shuffle: bool = False,
    rng: random.Random | None = None,
) -> int:
    """Drive one session from user commands until it completes or is closed."""
    completed = False

    def _on_complete() -> None:
        nonlocal completed
        completed = True

    session = StudySession(deck, title=title, on_complete=_on_complete, rng=rng)
    if shuffle:
        session.toggle_shuffle()

    print_fn(f"\nPractice with Flashcards: {session.card_count} cards")
    while not completed:
        _render(session, print_fn)
        choice = input_fn("Action: ").strip().lower()
        if choice in FLIP_COMMANDS:
            session.flip()
        elif choice == "n":
            if session.can_go_next:
                session.next()
            else:
                print_fn("Already at the last card.")
        elif choice == "p":
            if not session.previous():
                print_fn("Already at the first card.")
        elif choice == "k":
            session.mark_known()
        elif choice == "r":
            session.mark_for_review()
        elif choice == "s":
            session.toggle_shuffle()
            print_fn("Shuffle on." if session.is_shuffled else "Shuffle off.")
        elif choice == "x":
            if session.has_classifications:
                session.reset()
                print_fn("Progress reset.")
            else:
                print_fn("Nothing to reset.")
        elif choice in CLOSE_COMMANDS:
            print_fn("Session closed.")
            _print_summary(session, print_fn)
            return 0
        else:
            print_fn("Invalid choice.")

    print_fn("\nDeck complete!")
    _print_summary(session, print_fn)
    return 0


def _render(session: StudySession, print_fn: PrintFn) -> None:
    """Print the current face of the session's card with its header."""
    snapshot = session.snapshot()
    card = snapshot.card
    shuffle_state = "on" if snapshot.is_shuffled else "off"
    print_fn(f"\n=== {snapshot.title} ===")
    print_fn(f"Known: {snapshot.known_count}  Review: {snapshot.review_count}  Shuffle: {shuffle_state}")
    print_fn(f"Card {snapshot.position}/{snapshot.card_count} ({snapshot.progress:.0f}%)")
    if card.category:
        print_fn(f"[{card.category}]")
    if snapshot.is_flipped:
        print_fn(f"Answer: {card.back}")
    else:
        print_fn(f"Question: {card.front}")

    actions = ["f) Flip"]
    if session.can_go_previous:
        actions.append("p) Previous")
    if session.can_go_next:
        actions.append("n) Next")
    actions.extend(["k) Got it", "r) Need review", "s) Shuffle"])
    if session.has_classifications:
        actions.append("x) Reset progress")
    actions.append("q) Close")
    print_fn("  ".join(actions))


def _print_summary(session: StudySession, print_fn: PrintFn) -> None:
    unclassified = len({card.id for card in session.deck}) - session.known_count - session.review_count
    print_fn(f"Known: {session.known_count}")
    print_fn(f"Needs review: {session.review_count}")
    print_fn(f"Not classified: {unclassified}")


def main_entry() -> None:
    """Console script entrypoint."""
    raise SystemExit(run())


if __name__ == "__main__":  # pragma: no cover
    main_entry()
