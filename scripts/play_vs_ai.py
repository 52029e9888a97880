#!/usr/bin/env python3
"""Play Ultimate Tic-Tac-Toe against the search engine in the console, with optional logging & replay."""

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List

from mctree.config import load_yaml_config, search_config_from_dict, session_config_from_dict
from mctree.games import Player, UltimateTicTacToe, action_from_grid, decode_action, format_board
from mctree.logging_config import get_logger, setup_logging
from mctree.selfplay import SearchSession

logger = get_logger(__name__)


def grid_position(action: int) -> List[int]:
    board, cell = decode_action(action)
    return [(board // 3) * 3 + cell // 3, (board % 3) * 3 + cell % 3]


def prompt_human_move(state: UltimateTicTacToe) -> int:
    legal = set(state.available_actions())
    print("Legal moves (row col): " + ", ".join(" ".join(map(str, grid_position(a))) for a in sorted(legal)))
    while True:
        raw = input("Your move as 'row col' (q to quit): ").strip()
        if raw.lower() in {"q", "quit", "exit"}:
            print("Quitting.")
            sys.exit(0)
        parts = raw.split()
        if len(parts) != 2 or not all(part.isdigit() for part in parts):
            print("Enter two numbers between 0 and 8.")
            continue
        try:
            action = action_from_grid(int(parts[0]), int(parts[1]))
        except ValueError as exc:
            print(exc)
            continue
        if action in legal:
            return action
        print("That move is not legal. Try again.")


def think(session: SearchSession) -> int:
    """Run search rounds until the session plays a move for the engine."""
    session.set_options(enabled=True)
    while True:
        stats = session.run_round()
        if stats is not None and stats.played_action is not None:
            print(f"Engine evaluated {stats.total_sims} playouts; best line won {stats.wins}/{stats.sims} points.")
            return int(stats.played_action)


def save_log(log: Dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(log, indent=2))
    print(f"Saved game log to {path}.")


def replay_logged_game(log_path: Path, *, verbose: bool = True) -> Dict[str, object]:
    data = json.loads(log_path.read_text())
    moves = data.get("moves", [])
    state = UltimateTicTacToe()
    if verbose:
        print("Replaying logged game.")
        print(format_board(state))
    for entry in moves:
        action = entry["action"]
        mover = state.current_player
        state.apply_mut(action)
        if verbose:
            actor = entry.get("actor", "unknown")
            print(f"{actor} ({mover.name}) played {grid_position(action)}")
            print(format_board(state))
    winner = state.winner
    summary = {
        "result": winner.name if winner is not None else ("draw" if state.is_over else "ongoing"),
        "moves": len(moves),
        "board": state.board.tolist(),
    }
    if verbose:
        print(f"Result: {summary['result']}")
    return summary


def play_interactive(args: argparse.Namespace) -> None:
    cfg = load_yaml_config(args.config)
    search_config = search_config_from_dict(cfg.get("search"))
    if args.seed is not None:
        search_config.seed = args.seed
    session_config = session_config_from_dict(cfg.get("session"))
    session_config.thinking_time = args.thinking_time
    if args.simulations_per_step is not None:
        session_config.simulations_per_step = args.simulations_per_step

    human = Player[args.human]
    session_config.playing_for = {human.other().name}
    session = SearchSession(UltimateTicTacToe(), session_config, search_config=search_config)

    log_records: List[Dict] = []
    move_index = 0
    while not session.tree.is_game_over():
        state = session.tree.root_state
        print("\nCurrent board:")
        print(format_board(state))
        print(f"To move: {state.current_player.name}")

        mover = state.current_player
        if mover == human:
            action = prompt_human_move(state)
            session.play(action)
            actor = "human"
        else:
            action = think(session)
            actor = "ai"
            print(f"Engine ({mover.name}) plays {grid_position(action)}")

        log_records.append(
            {
                "move_index": move_index,
                "actor": actor,
                "player": mover.name,
                "action": int(action),
                "position": grid_position(action),
            }
        )
        move_index += 1

    state = session.tree.root_state
    print("\nFinal board:")
    print(format_board(state))
    winner = state.winner
    print(f"{winner.name} wins!" if winner is not None else "Draw.")
    logger.info("Game finished after %d moves, winner=%s", move_index, winner.name if winner else None)

    if args.log_file:
        metadata = {
            "human": args.human,
            "thinking_time": args.thinking_time,
            "seed": search_config.seed,
            "result": winner.name if winner is not None else "draw",
        }
        save_log({"metadata": metadata, "moves": log_records}, Path(args.log_file))


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Ultimate Tic-Tac-Toe in the console against the engine.")
    parser.add_argument("--config", type=str, default="configs/search.yaml")
    parser.add_argument("--human", choices=["X", "O"], default="X")
    parser.add_argument("--thinking-time", type=float, default=3.0)
    parser.add_argument("--simulations-per-step", type=int)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--log-file", type=str)
    parser.add_argument("--log-level", type=str, default="WARNING")
    parser.add_argument("--replay-log", type=str, help="Replay a logged game and exit")
    parser.add_argument("--replay-quiet", action="store_true")
    args = parser.parse_args()

    setup_logging(args.log_level)

    if args.replay_log:
        replay_logged_game(Path(args.replay_log), verbose=not args.replay_quiet)
        return

    play_interactive(args)


if __name__ == "__main__":
    main()
