import random

from tetris_core.__main__ import main, play, summary_line
from tetris_core.engine import GameState, new_game


def test_main_prints_field_and_summary(capsys):
    main(["--columns", "6", "--rows", "8", "--steps", "5", "--seed", "3"])
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 8 + 2 + 1
    assert lines[0] == "#" * 8
    assert lines[-2] == "#" * 8
    assert lines[-1].startswith("Score: 0  Lines: 0  State: ")


def test_play_stops_at_game_over():
    engine = new_game(rng=random.Random(1))
    engine.field.grid[1:-1, 1:-1] = 1
    engine.gravity_tick()
    assert engine.state is GameState.GAME_OVER
    assert play(engine, 10, random.Random(1)) == 0


def test_play_respects_step_budget():
    engine = new_game(rng=random.Random(2))
    assert play(engine, 3, random.Random(2)) == 3
    assert summary_line(engine) == "Score: 0  Lines: 0  State: RUNNING"
