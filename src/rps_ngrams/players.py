import random
from collections import Counter, deque
from typing import Callable, Deque, Dict, Optional, Tuple

from loguru import logger

from rps_ngrams.errors import InputError, InvariantViolation
from rps_ngrams.game_logic import MOVES, Move, Outcome, counter, random_move

PLAYERS = ("random", "ngrams")


class Player:
    def turn(self) -> Move:
        raise NotImplementedError

    def post_turn(self, opponent_move: Move, outcome: Outcome) -> None:
        # optional; used by the n-gram predictor
        pass


class RandomPlayer(Player):
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def turn(self):
        return random_move(self.rng)


class InteractivePlayer(Player):
    """Human at the terminal; `read_move` is the input source."""

    def __init__(self, read_move: Callable[[], Move]):
        self.read_move = read_move

    def turn(self):
        try:
            return self.read_move()
        except (EOFError, KeyboardInterrupt) as e:
            raise InputError("Couldn't get user input") from e


class NGramPlayer(Player):
    """
    Predict the opponent's next move from the frequency of N-move windows
    in its history, then play the counter.

    History is kept newest-first. Once N moves are buffered, every
    post_turn counts the newest N-window; turn() looks up the windows
    [candidate, *last N-1 moves] and predicts the most frequent candidate,
    breaking ties in Rock, Paper, Scissors order.
    """

    def __init__(self, window: int, rng: Optional[random.Random] = None):
        if window < 1:
            raise ValueError(f"window must be >= 1, got {window}")
        self.window = window
        self.rng = rng or random.Random()
        self._history: Deque[Move] = deque(maxlen=window)
        self._table: Counter = Counter()

    @property
    def history(self) -> Tuple[Move, ...]:
        return tuple(self._history)

    @property
    def table(self) -> Dict[Tuple[Move, ...], int]:
        return dict(self._table)

    def candidate_counts(self) -> Dict[Move, int]:
        prefix = tuple(self._history)[: self.window - 1]
        return {m: self._table[(m,) + prefix] for m in MOVES}

    def prediction(self) -> Optional[Move]:
        """The move the opponent is expected to play next, or None on cold start."""
        if len(self._history) < self.window:
            return None
        counts = self.candidate_counts()
        best = max(counts.values())
        for m in MOVES:
            if counts[m] == best:
                return m
        raise InvariantViolation(f"no candidate reached the maximum count {best}: {counts}")

    def turn(self):
        predicted = self.prediction()
        if predicted is None:
            move = random_move(self.rng)
            logger.debug(f"ngrams: cold start ({len(self._history)}/{self.window}), random {move}")
            return move
        move = counter(predicted)
        logger.debug(f"ngrams: predict {predicted}, play {move}")
        return move

    def post_turn(self, opponent_move, outcome):
        # deque(maxlen) drops the oldest entry from the right
        self._history.appendleft(opponent_move)
        if len(self._history) == self.window:
            self._table[tuple(self._history)] += 1

    def format_table(self) -> str:
        if not self._table:
            return "(empty)"
        rows = sorted(self._table.items(), key=lambda kv: -kv[1])
        return "\n".join(f"{' '.join(str(m) for m in key):<30} {count}" for key, count in rows)


def make_player(name: str, window: int = 3, rng: Optional[random.Random] = None) -> Player:
    name = (name or "").lower()
    if name == "ngrams":
        return NGramPlayer(window, rng)
    if name == "random":
        return RandomPlayer(rng)
    raise ValueError(f"Unknown opponent {name!r}; choose from {', '.join(PLAYERS)}")
