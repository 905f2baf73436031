import pytest

from rps_ngrams.errors import InputError
from rps_ngrams.game_logic import Move, Outcome
from rps_ngrams.match import Scoreboard, play_round, run_match
from rps_ngrams.players import InteractivePlayer, NGramPlayer, Player

R, P, S = Move.ROCK, Move.PAPER, Move.SCISSORS


class ScriptedPlayer(Player):
    def __init__(self, moves):
        self.moves = list(moves)
        self.seen = []

    def turn(self):
        return self.moves.pop(0)

    def post_turn(self, opponent_move, outcome):
        self.seen.append((opponent_move, outcome))


def test_play_round_feeds_back_opponent_moves():
    human, cpu = ScriptedPlayer([R]), ScriptedPlayer([S])
    board = Scoreboard()
    result = play_round(human, cpu, board)
    assert (result.round, result.human_move, result.cpu_move) == (1, R, S)
    assert result.outcome == Outcome.HUMAN_WINS
    assert human.seen == [(S, Outcome.HUMAN_WINS)]
    assert cpu.seen == [(R, Outcome.HUMAN_WINS)]
    assert board.wins == 1


def test_scoreboard_win_rate_ignores_ties():
    board = Scoreboard()
    assert board.win_rate == 0.0
    for outcome in [Outcome.HUMAN_WINS, Outcome.TIE, Outcome.CPU_WINS, Outcome.HUMAN_WINS, Outcome.TIE]:
        board.record(outcome)
    assert (board.wins, board.losses, board.ties, board.rounds) == (2, 1, 2, 5)
    assert board.win_rate == pytest.approx(2 / 3)


def test_run_match_reports_every_round():
    human = ScriptedPlayer([R, P, S, R])
    cpu = ScriptedPlayer([R, R, R, P])
    reported = []
    board = run_match(human, cpu, lambda result, b: reported.append(result), rounds=4)
    assert [r.round for r in reported] == [1, 2, 3, 4]
    assert [r.outcome for r in reported] == [
        Outcome.TIE, Outcome.HUMAN_WINS, Outcome.CPU_WINS, Outcome.CPU_WINS,
    ]
    assert (board.wins, board.losses, board.ties) == (1, 2, 1)


def test_run_match_ends_on_input_error():
    moves = iter([R, R])

    def read():
        try:
            return next(moves)
        except StopIteration:
            raise EOFError

    reported = []
    with pytest.raises(InputError):
        run_match(InteractivePlayer(read), NGramPlayer(1), lambda r, b: reported.append(r))
    assert len(reported) == 2


def test_predictor_beats_a_stubborn_human():
    human = ScriptedPlayer([R] * 20)
    board = run_match(human, NGramPlayer(1), lambda r, b: None, rounds=20)
    # only the cold-start round can go the human's way
    assert board.wins <= 1
    assert board.losses >= 19
