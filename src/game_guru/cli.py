"""
Command-line interface for game-guru

Plays the sports trivia quiz in the terminal: answer until the first miss,
then the final score is minted.
"""

import asyncio
import sys
import argparse
import json
import logging
import random
from typing import Callable, Optional

from .catalog import SPORTS, get_sport, verdict
from .config import config
from .engine import QuizEngine, Session, EngineStatus, MintStatus
from .minting import MintWorker, get_mint_trigger
from .stores import get_store


def format_question(session: Session) -> str:
    """Format the current question and its numbered options."""
    question = session.current_question
    lines = [
        "",
        f"Question {session.questions_answered + 1}  (score: {session.score})",
        "-" * 60,
        question.text,
        "",
    ]
    for i, option in enumerate(question.options, start=1):
        lines.append(f"  {i}. {option}")
    return "\n".join(lines)


def format_mint_status(session: Session) -> str:
    """One-line mint banner for the game-over screen."""
    if session.mint_status == MintStatus.COMPLETE:
        return f"\033[92mScore minted!\033[0m Transaction: {session.mint_receipt.tx_hash}"
    if session.mint_status == MintStatus.FAILED:
        return f"\033[91mMint failed:\033[0m {session.mint_error}"
    if session.mint_status == MintStatus.IN_PROGRESS:
        return "Minting your score..."
    return "Score not minted (minting disabled)"


def _confirm(read: Callable[[str], str], prompt: str) -> bool:
    return read(prompt).strip().lower() in ("y", "yes")


async def play_game(
    engine: QuizEngine,
    worker: Optional[MintWorker] = None,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> Session:
    """
    Run interactive play-throughs until the player stops.

    Args:
        engine: Engine to drive
        worker: Mint worker to wait on at game over
        read: Prompt function (input() by default)
        write: Output function (print() by default)

    Returns:
        The last session played
    """
    while engine.status in (EngineStatus.LOADING, EngineStatus.ERROR):
        if await engine.load_questions():
            break
        write(f"\033[91m{engine.error}\033[0m")
        if not _confirm(read, "Retry loading? [y/N] "):
            return engine.session

    while True:
        session = engine.session

        while not session.is_game_over:
            write(format_question(session))
            option_count = len(session.current_question.options)
            choice = read(f"Your answer (1-{option_count}, q to quit): ").strip().lower()

            if choice in ("q", "quit"):
                return session
            if not choice.isdecimal() or not engine.select_option(int(choice) - 1):
                write(f"Pick a number between 1 and {option_count}")
                continue

            engine.submit_answer()
            if session.is_correct:
                write("\033[92mCorrect!\033[0m")
                engine.next_question()
            else:
                write(f"\033[91mIncorrect!\033[0m The correct answer was: {session.current_question.correct_answer}")

        write("")
        write("=" * 60)
        write(f"QUIZ COMPLETE!  Your Score: {session.score}")
        write(verdict(session.score, engine.sport))
        write("=" * 60)

        if worker is not None:
            write(format_mint_status(session))
            await worker.drain()
            write(format_mint_status(session))

            while session.can_retry_mint and _confirm(read, "Retry mint? [y/N] "):
                engine.retry_mint()
                await worker.drain()
                write(format_mint_status(session))

        if not _confirm(read, "Try again? [y/N] "):
            return session

        await engine.restart()


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="game-guru",
        description="Sports trivia quiz with on-chain score minting",
        epilog="Example: game-guru play --sport football --wallet 0xabc..."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    sports_parser = subparsers.add_parser("sports", help="List available sports")
    sports_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON"
    )

    play_parser = subparsers.add_parser("play", help="Play a quiz")
    play_parser.add_argument(
        "--sport",
        default=config.game.default_sport,
        help=f"Sport to play (default: {config.game.default_sport})"
    )
    play_parser.add_argument(
        "--count",
        type=int,
        default=config.store.question_count,
        help="Number of questions to request from the store"
    )
    play_parser.add_argument(
        "--seed",
        type=int,
        default=config.game.seed,
        help="Random seed for reproducible question order"
    )
    play_parser.add_argument(
        "--wallet",
        default=config.game.wallet_address,
        help="Wallet address credited with the minted score"
    )
    play_parser.add_argument(
        "--api-url",
        help="Question API base URL (overrides GAME_GURU_API_URL)"
    )
    play_parser.add_argument(
        "--mock",
        action="store_true",
        help="Use bundled questions and a mock mint (no network)"
    )
    play_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the final session as JSON"
    )
    play_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "sports":
        if args.json:
            print(json.dumps([s.to_dict() for s in SPORTS], indent=2))
        else:
            for sport in SPORTS:
                status = "" if sport.available else "  (coming soon)"
                print(f"  {sport.name:<12} {sport.description}{status}")
        return

    if args.command == "play":
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        )

        sport = get_sport(args.sport)
        if sport is None:
            print(f"Unknown sport: {args.sport}", file=sys.stderr)
            sys.exit(1)
        if not sport.available:
            print(f"Coming Soon: {sport.name} Quiz")
            sys.exit(1)

        async def run_play():
            store_name = "static" if args.mock else config.game.store_provider
            store_kwargs = {"base_url": args.api_url} if store_name == "http" and args.api_url else {}
            store = get_store(store_name, sport=sport.key, **store_kwargs)

            trigger = get_mint_trigger("mock" if args.mock else config.game.mint_provider)
            worker = MintWorker(trigger)

            engine = QuizEngine(
                store,
                dispatcher=worker,
                rng=random.Random(args.seed),
                wallet_address=args.wallet,
                sport=sport.key,
                question_count=args.count,
            )

            try:
                session = await play_game(engine, worker)
            finally:
                await worker.close()
                await store.close()

            if args.json:
                print(json.dumps(session.to_dict(), indent=2))

        try:
            asyncio.run(run_play())
        except (KeyboardInterrupt, EOFError):
            print("\nBye!")


if __name__ == "__main__":
    main()
