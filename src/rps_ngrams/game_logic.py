import random
from enum import Enum
from typing import Optional


class Move(Enum):
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"

    def __str__(self):
        return self.value.capitalize()

    @classmethod
    def parse(cls, text: str) -> "Move":
        """Accept a full move name or its first letter, any case."""
        key = (text or "").strip().lower()
        for move in MOVES:
            if key in (move.value, move.value[0]):
                return move
        raise ValueError(f"Not a move: {text!r}")


class Outcome(Enum):
    HUMAN_WINS = "win"
    CPU_WINS = "lose"
    TIE = "tie"


# Fixed order; the predictor breaks ties in this order too.
MOVES = (Move.ROCK, Move.PAPER, Move.SCISSORS)
BEATS = {Move.ROCK: Move.SCISSORS, Move.PAPER: Move.ROCK, Move.SCISSORS: Move.PAPER}
LOSES_TO = {v: k for k, v in BEATS.items()}  # inverse


def beats(a: Move, b: Move) -> bool:
    return BEATS[a] is b


def counter(move: Move) -> Move:
    """Return the move that beats `move`."""
    return LOSES_TO[move]


def random_move(rng: Optional[random.Random] = None) -> Move:
    return (rng or random).choice(MOVES)


def adjudicate(human: Move, cpu: Move) -> Outcome:
    """
    Return the outcome from the human's side: HUMAN_WINS | CPU_WINS | TIE
    """
    if human is cpu:
        return Outcome.TIE
    return Outcome.HUMAN_WINS if BEATS[human] is cpu else Outcome.CPU_WINS
