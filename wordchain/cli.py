"""
Wordchain CLI - Command-line interface for the engine.

Usage:
    wordchain play [--turn-seconds N]     Hot-seat game in the terminal
    wordchain serve [--host H --port P]   Run the HTTP/WebSocket API
"""

import argparse
import math
import sys
import time

from .config import HOST, LOG_LEVEL, PORT, TURN_SECONDS
from .logging_config import configure_logging


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Wordchain - Two-player word-chain game",
        prog="wordchain",
    )
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a hot-seat game in the terminal")
    play_parser.add_argument(
        "--turn-seconds", type=int, default=TURN_SECONDS, help="Seconds per turn"
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default=HOST, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=PORT, help="Bind port")

    args = parser.parse_args()
    configure_logging(args.log_level)

    if args.command == "play":
        cmd_play(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def elapsed_ticks(started: float, finished: float) -> int:
    """Whole seconds between showing the prompt and reading the answer."""
    return max(int(math.floor(finished - started)), 0)


def render(snapshot) -> str:
    """Plain-text rendering of a snapshot."""
    lines = [
        "",
        f"Round {snapshot.round_number}",
        f"  Active chain: {' -> '.join(snapshot.active_chain) or '(empty)'}",
        f"  Player 1: {snapshot.player1_score} pts | Player 2: {snapshot.player2_score} pts",
    ]
    if snapshot.largest_word:
        lines.append(f"  Largest word: {snapshot.largest_word}")
    if snapshot.leader:
        lines.append(f"  Current leader: Player {snapshot.leader}")
    if snapshot.last_error:
        lines.append(f"  ! {snapshot.last_error}")
    return "\n".join(lines)


def render_history(snapshot) -> str:
    lines = []
    for round_view in snapshot.rounds:
        winner = f"Player {round_view.winner}" if round_view.winner else "tie"
        lines.append(
            f"Round {round_view.round_number}: "
            f"P1 {round_view.player1.total_letters} letters, "
            f"P2 {round_view.player2.total_letters} letters, winner: {winner}"
        )
    return "\n".join(lines)


def cmd_play(args):
    """
    Hot-seat game.

    Each prompt arms the clock. Time since the clock was armed is
    converted into ticks applied before the answer, so a turn keeps
    counting down across empty answers. An answer typed after the
    clock ran out is discarded, since the round has already ended.
    """
    from .engine_core import GameController

    controller = GameController(turn_seconds=args.turn_seconds)
    print("Word Chain Game - each word must start with the last letter of the previous one.")
    print(f"{args.turn_seconds} seconds per turn. Ctrl-D or 'quit' to stop.")

    armed_epoch = None
    armed_at = 0.0
    applied = 0

    while True:
        snapshot = controller.focus_input()
        if snapshot.clock_epoch != armed_epoch:
            armed_epoch = snapshot.clock_epoch
            armed_at = time.monotonic()
            applied = 0
        print(render(snapshot))

        letter = snapshot.required_letter or "any letter"
        prompt = f"Player {snapshot.current_player} ({letter}, {snapshot.timer}s): "
        try:
            text = input(prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            break
        finished = time.monotonic()

        if text.strip().lower() == "quit":
            break

        expired = False
        for _ in range(elapsed_ticks(armed_at, finished) - applied):
            applied += 1
            snapshot = controller.tick(epoch=armed_epoch)
            if not snapshot.timer_running:
                expired = True
                break

        if expired:
            continue

        controller.submit_word(text)

    snapshot = controller.snapshot()
    print("\nFinal scores")
    print(f"  Player 1: {snapshot.player1_score}")
    print(f"  Player 2: {snapshot.player2_score}")
    if snapshot.rounds:
        print(render_history(snapshot))
    if snapshot.leader:
        print(f"Winner: Player {snapshot.leader}")
    else:
        print("It's a tie")


def cmd_serve(args):
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("wordchain.api.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
