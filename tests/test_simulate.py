import json
import os
import random

import pandas as pd
import pytest

from dond_classic.board import OPEN_SCHEDULE
from dond_classic.game import ComputerPlayer, play_game
from dond_classic.simulate import (
    NO_DEAL_ROUND,
    STRATEGIES,
    deal_timing_table,
    replay_lines,
    run_simulation,
    run_trials,
    save_replay_timeline,
    summarize,
)


def test_run_trials_frame():
    df, best = run_trials(20, "heuristic", base_seed=1, show_progress=False)
    assert len(df) == 20
    assert list(df.columns) == ["strategy", "seed", "chosen_value", "winnings", "deal_round"]
    assert set(df["strategy"]) == {"heuristic"}
    assert df["deal_round"].between(1, NO_DEAL_ROUND).all()
    assert best.winnings == df["winnings"].max()


def test_run_trials_is_reproducible():
    df1, _ = run_trials(10, "ev_baseline", base_seed=99, show_progress=False)
    df2, _ = run_trials(10, "ev_baseline", base_seed=99, show_progress=False)
    assert df1.equals(df2)


def test_unknown_strategy():
    with pytest.raises(ValueError):
        run_trials(1, "coin_flip", base_seed=0, show_progress=False)


def test_summary_per_strategy():
    df, _ = run_trials(5, "heuristic", base_seed=3, show_progress=False)
    summary = summarize(df)
    assert list(summary.index) == ["heuristic"]
    assert summary.loc["heuristic", "count"] == 5
    assert "50%" in summary.columns


def test_replay_transcript():
    _, best = run_trials(5, "heuristic", base_seed=4, show_progress=False)
    text = "\n".join(replay_lines(best))
    assert "BEST GAME REPLAY" in text
    assert f"Round 1 (opened {OPEN_SCHEDULE[0]}):" in text


def test_run_simulation_writes_reports(tmp_path, capsys):
    out = str(tmp_path / "sim")
    written = run_simulation(4, out, seed=8, show_progress=False, charts=True)
    assert len(written) == 6
    for path in written:
        assert os.path.exists(path)

    with open(out + "_best_replay.json", encoding="utf-8") as f:
        replay = json.load(f)
    assert replay["open_schedule"] == OPEN_SCHEDULE
    assert replay["strategy"] in STRATEGIES
    assert replay["offer_params"]["cap"] == 0.9


def test_deal_timing_table_labels():
    df = pd.DataFrame({
        "strategy": ["heuristic", "heuristic", "heuristic", "ev_baseline"],
        "deal_round": [1, 3, NO_DEAL_ROUND, NO_DEAL_ROUND],
    })
    timing = deal_timing_table(df)
    assert list(timing.columns) == ["R1", "R3", "No deal"]
    assert timing.loc["heuristic"].sum() == pytest.approx(1.0)
    assert timing.loc["ev_baseline", "No deal"] == pytest.approx(1.0)


def test_replay_timeline_marks_no_deal_game(tmp_path):
    player = ComputerPlayer(rng=random.Random(2), decide=lambda *a: False)
    glog = play_game(player, rng=random.Random(2))
    save_replay_timeline(glog, str(tmp_path / "nodeal"))
    assert os.path.exists(str(tmp_path / "nodeal_best_replay_timeline.png"))
