#!/usr/bin/env python3
"""Evaluate the search engine against a random player on Ultimate Tic-Tac-Toe."""

import argparse
import json

from tqdm.auto import trange

from mctree.config import load_yaml_config, search_config_from_dict
from mctree.evaluation import evaluate_policies
from mctree.games import UltimateTicTacToe
from mctree.logging_config import setup_logging
from mctree.selfplay import RandomPolicy, TreeSearchPolicy


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default="configs/search.yaml")
    parser.add_argument("--episodes", type=int)
    parser.add_argument("--num-playouts", type=int)
    parser.add_argument("--search-steps", type=int)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--engine-plays", choices=["X", "O", "both"], default="both")
    parser.add_argument("--log-level", type=str, default="INFO")
    parser.add_argument("--json-logs", action="store_true")
    args = parser.parse_args()

    setup_logging(args.log_level, format_json=args.json_logs)

    cfg = load_yaml_config(args.config)
    episodes = args.episodes if args.episodes is not None else cfg.get("episodes", 4)
    search_cfg = dict(cfg.get("search", {}))
    if args.num_playouts is not None:
        search_cfg["num_playouts"] = args.num_playouts
    if args.search_steps is not None:
        search_cfg["search_steps"] = args.search_steps
    if args.seed is not None:
        search_cfg["seed"] = args.seed
    search = search_config_from_dict(search_cfg)
    seed = search.seed or 0

    seats = ["X", "O"] if args.engine_plays == "both" else [args.engine_plays]
    summary = {}
    for seat in seats:
        totals = {"engine": 0, "random": 0, "draws": 0}
        for episode in trange(episodes, desc=f"Engine as {seat}"):
            engine = TreeSearchPolicy(search).spawn(seed + episode)
            opponent = RandomPolicy().spawn(seed + 1000 + episode)
            policies = [engine, opponent] if seat == "X" else [opponent, engine]
            result = evaluate_policies(policies, episodes=1, game_factory=UltimateTicTacToe)
            other = "O" if seat == "X" else "X"
            totals["engine"] += result.wins.get(seat, 0)
            totals["random"] += result.wins.get(other, 0)
            totals["draws"] += result.draws
        summary[seat] = totals

    print(json.dumps({"episodes": episodes, "search": vars(search), "results": summary}, indent=2))


if __name__ == "__main__":
    main()
