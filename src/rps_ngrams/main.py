import argparse
import random
import sys
from typing import Callable, List, Optional

from loguru import logger
from pydantic import ValidationError

from rps_ngrams.config import apply_overrides, load_config
from rps_ngrams.errors import InputError
from rps_ngrams.game_logic import Move, Outcome
from rps_ngrams.match import RoundResult, Scoreboard, run_match
from rps_ngrams.players import PLAYERS, InteractivePlayer, NGramPlayer, Player, make_player

PROMPT = "Select your move ([r]ock, [p]aper, [s]cissors): "
OUTCOME_TEXT = {
    Outcome.HUMAN_WINS: "You Won!",
    Outcome.CPU_WINS: "You Lost :(",
    Outcome.TIE: "It's a tie.",
}


def setup_logging(level: str):
    logger.remove()
    logger.add(sys.stderr, level=level)


def prompt_move(read: Callable[[str], str] = input) -> Move:
    """Ask until the user types a move. EOF / Ctrl-C propagate to the caller."""
    while True:
        text = read(PROMPT)
        try:
            return Move.parse(text)
        except ValueError:
            print(f"'{text.strip()}' is not a move, try again.")


def print_round(result: RoundResult, scoreboard: Scoreboard, cpu: Optional[Player] = None,
                show_table: bool = False, show_prediction: bool = False):
    print(f"Round {result.round}: you played {result.human_move}, CPU played {result.cpu_move}.")
    print(OUTCOME_TEXT[result.outcome])
    print(f"W {scoreboard.wins} / L {scoreboard.losses} / T {scoreboard.ties}"
          f"  win rate {scoreboard.win_rate:.0%}")
    if isinstance(cpu, NGramPlayer):
        if show_prediction:
            predicted = cpu.prediction()
            print(f"CPU expects you to play: {predicted if predicted else '?'}")
        if show_table:
            print("n-gram table:")
            print(cpu.format_table())
    print()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="rps-ngrams", description="Rock Paper Scissors against an n-gram predictor.")
    p.add_argument("--config", help="Path to a YAML config file (defaults to the packaged one)")
    p.add_argument("--opponent", choices=PLAYERS, help="CPU strategy")
    p.add_argument("--window", type=int, help="n-gram window size")
    p.add_argument("--seed", type=int, help="Seed for the CPU's random choices")
    p.add_argument("--rounds", type=int, help="Stop after this many rounds (default: play forever)")
    p.add_argument("--show-table", action="store_true", default=None, help="Print the raw n-gram table each round")
    p.add_argument("--show-prediction", action="store_true", default=None, help="Print the CPU's prediction each round")
    p.add_argument("--log-level", help="Log level for stderr (DEBUG, INFO, ...)")
    return p


def main(argv: Optional[List[str]] = None, read: Callable[[str], str] = input) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        cfg = apply_overrides(load_config(args.config), {
            "ai": {"policy": args.opponent, "window": args.window, "seed": args.seed},
            "ui": {"show_table": args.show_table, "show_prediction": args.show_prediction},
            "logging": {"level": args.log_level},
        })
    except ValidationError as e:
        parser.error(f"invalid configuration: {e}")
    setup_logging(cfg.logging.level)
    logger.debug(f"Config: {cfg.model_dump()}")

    rng = random.Random(cfg.ai.seed)
    human = InteractivePlayer(lambda: prompt_move(read))
    cpu = make_player(cfg.ai.policy, cfg.ai.window, rng)

    def report(result, scoreboard):
        print_round(result, scoreboard, cpu, cfg.ui.show_table, cfg.ui.show_prediction)

    print("Welcome to Rock Paper Scissors.")
    try:
        scoreboard = run_match(human, cpu, report, rounds=args.rounds)
    except InputError as e:
        logger.error(f"{e}; ending the match")
        return 1
    print(f"Final score: W {scoreboard.wins} / L {scoreboard.losses} / T {scoreboard.ties}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
