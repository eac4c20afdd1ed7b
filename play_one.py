import argparse
import json
import logging
import random
import sys

from rps_match import (BestOfN, Difficulty, FirstToK, Match, MatchConfig, Mode, RpsMatchError, Ruleset,
                       SingleRound, parse_move)
from rps_match.config import SETTINGS
from rps_match.stats import merge_match_result, stats_to_dict


def load_json_config(path: str) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        logging.getLogger("play_one").error("Failed to read config %s: %s", path, e)
        return {}


def build_format(kind: str, count: int | None):
    if kind == "single":
        return SingleRound()
    if kind == "best-of":
        return BestOfN(int(count if count is not None else 3))
    if kind == "first-to":
        return FirstToK(int(count if count is not None else 3))
    raise ValueError(f"Unsupported format '{kind}'. Use single, best-of or first-to.")


def parse_moves(text, ruleset: Ruleset) -> list:
    """Accept "r,p,s" (CLI) or ["r", "p", "s"] (JSON config)."""
    if isinstance(text, list):
        parts = text
    elif isinstance(text, str) or text is None:
        parts = (text or "").split(",")
    else:
        raise ValueError(f"Moves must be a comma-separated string or a list, got {text!r}")
    if not all(isinstance(p, str) for p in parts):
        raise ValueError(f"Moves must be strings, got {parts!r}")
    moves = []
    for raw in [p for p in parts if p.strip()]:
        mv = parse_move(raw, ruleset)
        if mv is None:
            raise ValueError(f"Invalid move '{raw.strip()}' for the {ruleset.value} ruleset")
        moves.append(mv)
    return moves


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Play one scripted Rock-Paper-Scissors match.")
    ap.add_argument("--config", default=None, help="Optional JSON config file to load defaults from.")
    ap.add_argument("--p1", default=None, help="Player 1 name")
    ap.add_argument("--p2", default=None, help="Player 2 name (multiplayer only)")
    ap.add_argument("--mode", choices=["single", "multi"], default=None)
    ap.add_argument("--ruleset", choices=["classic", "extended"], default=None)
    ap.add_argument("--format", choices=["single", "best-of", "first-to"], default=None)
    ap.add_argument("--count", type=int, default=None, help="N for best-of, K for first-to")
    ap.add_argument("--difficulty", choices=["easy", "normal", "hard"], default=None)
    ap.add_argument("--moves", default=None, help="Comma-separated player 1 moves, e.g. rock,p,s")
    ap.add_argument("--p2-moves", default=None, help="Comma-separated player 2 moves (multiplayer only)")
    ap.add_argument("--seed", type=int, default=None, help="Seed for the computer opponent")
    ap.add_argument("--log-level", default=None, help="Python logging level (e.g., INFO, DEBUG)")
    args = ap.parse_args(argv)

    cfg_dict = load_json_config(args.config) if args.config else {}

    # Resolve values with precedence: CLI arg if provided -> config -> default
    def pick(*keys, default=None):
        for k in keys:
            v = getattr(args, k, None)
            if v is not None:
                return v
            if k in cfg_dict and cfg_dict[k] is not None:
                return cfg_dict[k]
        return default

    log_level = str(pick("log_level", default=SETTINGS.log_level)).upper()
    logging.basicConfig(level=getattr(logging, log_level, logging.INFO), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    log = logging.getLogger("play_one")

    try:
        ruleset = Ruleset(str(pick("ruleset", default=SETTINGS.default_ruleset)).capitalize())
        fmt = build_format(pick("format", default="best-of"), pick("count", default=None))
        mode = pick("mode", default="single")
        p1 = pick("p1", default="Player 1")
        if mode == "single":
            difficulty = Difficulty(str(pick("difficulty", default=SETTINGS.default_difficulty)).capitalize())
            config = MatchConfig.single_player(p1, ruleset, fmt, difficulty, computer_name=SETTINGS.computer_name)
        else:
            config = MatchConfig.multiplayer(p1, pick("p2", default="Player 2"), ruleset, fmt)
        p1_moves = parse_moves(pick("moves", default=""), ruleset)
        p2_moves = parse_moves(pick("p2_moves", default=""), ruleset) if config.mode == Mode.MULTIPLAYER else []
    except (RpsMatchError, ValueError) as e:
        log.error("Invalid setup: %s", e)
        return 2

    seed = pick("seed", default=SETTINGS.seed)
    match = Match(config, rng=random.Random(seed))
    log.info("Starting match: %s vs %s ruleset=%s format=%s difficulty=%s", config.player1, config.player2,
             config.ruleset.value, config.format.describe(), config.difficulty.value if config.difficulty else None)

    for i, mv in enumerate(p1_moves):
        if match.is_complete:
            break
        if config.vs_computer:
            reply, outcome = match.play_computer_round(mv)
        else:
            if i >= len(p2_moves):
                log.warning("Ran out of player 2 moves after %d rounds", i)
                break
            reply = p2_moves[i]
            outcome = match.advance_round(mv, reply)
        print(f"Round {match.state.round_index - 1}: {mv.label} vs {reply.label} -> {outcome.value}")

    print("Format:", config.format.describe())
    print(f"Score: {config.player1} {match.state.p1_round_wins} - {match.state.p2_round_wins} {config.player2}")
    print("Metrics:", match.metrics())

    result = match.match_result()
    if result is None:
        print("Match not finished; saved state:")
        print(match.state.to_json())
        return 0
    print("Winner:", result.winner or "tie")
    players = {}
    merge_match_result(players, result)
    print("Scoreboard:", json.dumps(stats_to_dict(players)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
