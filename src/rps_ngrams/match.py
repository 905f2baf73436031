from dataclasses import dataclass
from typing import Callable, Optional

from loguru import logger

from rps_ngrams.game_logic import Move, Outcome, adjudicate
from rps_ngrams.players import Player


@dataclass(frozen=True)
class RoundResult:
    """A single played round."""
    round: int
    human_move: Move
    cpu_move: Move
    outcome: Outcome


@dataclass
class Scoreboard:
    wins: int = 0
    losses: int = 0
    ties: int = 0

    @property
    def rounds(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def win_rate(self) -> float:
        """Human wins over decisive rounds; ties are not counted."""
        decisive = self.wins + self.losses
        return self.wins / decisive if decisive else 0.0

    def record(self, outcome: Outcome) -> None:
        if outcome is Outcome.HUMAN_WINS:
            self.wins += 1
        elif outcome is Outcome.CPU_WINS:
            self.losses += 1
        else:
            self.ties += 1


def play_round(human: Player, cpu: Player, scoreboard: Scoreboard) -> RoundResult:
    human_move = human.turn()
    cpu_move = cpu.turn()
    outcome = adjudicate(human_move, cpu_move)
    scoreboard.record(outcome)

    human.post_turn(cpu_move, outcome)
    cpu.post_turn(human_move, outcome)

    result = RoundResult(scoreboard.rounds, human_move, cpu_move, outcome)
    logger.info(f"Round {result.round}: human={human_move} cpu={cpu_move} -> {outcome.value}")
    return result


def run_match(
    human: Player,
    cpu: Player,
    report: Callable[[RoundResult, Scoreboard], None],
    rounds: Optional[int] = None,
) -> Scoreboard:
    """
    Play rounds until `rounds` have been played, or forever when it is None.
    InputError from the human player propagates and ends the match.
    """
    scoreboard = Scoreboard()
    while rounds is None or scoreboard.rounds < rounds:
        report(play_round(human, cpu, scoreboard), scoreboard)
    return scoreboard
