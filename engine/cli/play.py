#!/usr/bin/env python3
"""
Terminal-based Othello client.

Play against the minimax bot, watch two bots play, or play both sides.
"""

from __future__ import annotations
import argparse
import logging
import sys
import time
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from othello.core.bitboard import BLACK, WHITE, COLOR_NAMES, COLOR_SYMBOLS
from othello.core.state import BoardState
from othello.core.moves import MoveOutcome, legal_coordinates
from othello.core.notation import parse_coord, coord_to_algebraic
from othello.ai.minimax import Minimax, SearchConfig
from othello.game import GameSession


def print_board(state: BoardState, highlight_moves: list[tuple[int, int]] = None) -> None:
    """Print the board with optional move highlighting.

    Symbols:
        b = black disc
        w = white disc
        * = legal move for the side to move (green)
    """
    GREEN = '\033[92m'
    RESET = '\033[0m'

    targets = set(highlight_moves or [])

    print()
    print("    a b c d e f g h")
    print("  +" + "-" * 17 + "+")
    for row in range(8):
        line = f"{row + 1} |"
        for col in range(8):
            if (row, col) in targets:
                line += f" {GREEN}*{RESET}"
            else:
                line += f" {COLOR_SYMBOLS[state.cell(row, col)]}"
        line += " |"
        print(line)
    print("  +" + "-" * 17 + "+")
    print(f"  Black {state.black}  White {state.white}  ({COLOR_NAMES[state.turn]} to move)")
    print()


def show_legal_moves(state: BoardState) -> None:
    """Display all legal moves."""
    moves = legal_coordinates(state)
    if not moves:
        print("No legal moves!")
        return
    print("Legal moves:", ", ".join(coord_to_algebraic(m) for m in moves))


def show_analysis(session: GameSession, color: int, show_tree: int) -> None:
    bot = session.bots[color]
    result = bot.last_result
    if result is None:
        return
    print(f"{bot.name}: {result.nodes_visited} states examined in {result.elapsed:.2f}s")
    for m in Minimax(bot.config).analyze(result, top_k=3):
        print(f"  {m['algebraic']} ({m['key']}): value={m['value']:+d}")
    if show_tree > 0:
        print(result.tree.format(max_level=show_tree))


def print_record(session: GameSession) -> None:
    record = session.record()
    print("\n=== Move History ===\n")
    print(f"Black: {record.black}")
    print(f"White: {record.white}\n")
    for line in record.history_lines():
        print(f"\t{line}")
    black, white = session.scores
    print(f"\nBlack: {black}")
    print(f"White: {white}")
    won = session.winner
    print(f"Winner: {COLOR_NAMES[won] if won is not None else 'Tie'}")
    print("\n====================\n")
    print(record.to_text())


def human_turn(session: GameSession) -> bool:
    """Read moves until one is applied. Returns False to quit."""
    state = session.board
    print(f"Your turn ({COLOR_NAMES[state.turn]})")
    while True:
        try:
            user_input = input("> ").strip().lower()
        except EOFError:
            return False

        if user_input in ['q', 'quit', 'exit']:
            return False
        if user_input in ['h', 'help', '?']:
            print("Enter moves like 'd3' or '2:3'")
            print("'m' to see legal moves, 'p' to print the record, 'q' to quit")
            continue
        if user_input in ['m', 'moves']:
            show_legal_moves(state)
            continue
        if user_input in ['p', 'print']:
            print_record(session)
            continue

        try:
            row, col = parse_coord(user_input)
        except ValueError:
            print(f"Invalid format: {user_input}. Use notation like 'd3'")
            continue

        result = session.play(row, col)
        if result.outcome is MoveOutcome.ILLEGAL:
            print(f"Illegal move: {user_input}")
            continue
        print(f"You played: {coord_to_algebraic((row, col))}")
        return True


def run_game(session: GameSession, show_tree: int = 0, delay: float = 0.0) -> None:
    print("\n=== Othello ===")
    print(f"Black: {session.player_label(BLACK)}")
    print(f"White: {session.player_label(WHITE)}")

    while not session.is_blocked:
        state = session.board
        print_board(state, highlight_moves=None if session.bot_to_move else legal_coordinates(state))

        if not session.bot_to_move:
            if not human_turn(session):
                print("Thanks for playing!")
                return
            continue

        color = state.turn
        bot = session.bots[color]
        print(f"{COLOR_NAMES[color]} thinking (depth {bot.depth}"
              f"{', alpha-beta' if bot.alpha_beta_enabled else ''})...")
        session.start_bot_turn()
        result = session.wait_bot()
        show_analysis(session, color, show_tree)
        if result is not None and result.applied:
            print(f"{COLOR_NAMES[color]} plays: {coord_to_algebraic(result.move)}")
        if delay:
            time.sleep(delay)

    print_board(session.board)
    if session.status is MoveOutcome.NO_MOVES:
        print(f"{COLOR_NAMES[session.board.turn]} has no legal moves. Play stops.")
    else:
        print("Game over.")
    print_record(session)


def main():
    parser = argparse.ArgumentParser(description='Othello Terminal Client')
    parser.add_argument('--black', choices=['human', 'ai'], default='human', help='Black player')
    parser.add_argument('--white', choices=['human', 'ai'], default='ai', help='White player')
    parser.add_argument('--depth', type=int, default=4, help='Search depth for both bots (1-10)')
    parser.add_argument('--black-depth', type=int, help='Search depth for the black bot')
    parser.add_argument('--white-depth', type=int, help='Search depth for the white bot')
    parser.add_argument('--alpha-beta', action='store_true', help='Enable alpha-beta pruning')
    parser.add_argument('--show-tree', type=int, default=0, metavar='N',
                        help='Print the top N levels of each search tree')
    parser.add_argument('--delay', type=float, default=0.0, help='Pause after bot moves (seconds)')
    parser.add_argument('--log-level', default='WARNING', help='Logging level')

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        black_config = SearchConfig(depth=args.black_depth or args.depth, alpha_beta=args.alpha_beta)
        white_config = SearchConfig(depth=args.white_depth or args.depth, alpha_beta=args.alpha_beta)
    except ValueError as e:
        parser.error(str(e))

    session = GameSession(
        black_config=black_config,
        white_config=white_config,
        black_ai=args.black == 'ai',
        white_ai=args.white == 'ai',
    )
    run_game(session, show_tree=args.show_tree, delay=args.delay)


if __name__ == '__main__':
    main()
