"""
Batch auto-play: run many computer games per strategy and report on them.

Strategies:
1) heuristic:
   - the advisor's deal rule (90% / 85% of EV early and mid game,
     risk factor or 80% of EV in the endgame)
2) ev_baseline:
   - Deal if offer >= EV(remaining) (risk-neutral baseline)

Outputs:
- <out>_raw.csv
- <out>_summary.csv
- <out>_win_distribution.png
- <out>_deal_timing.png
- <out>_best_replay.json
- <out>_best_replay_timeline.png
"""

from __future__ import annotations

import json
import logging
import random
import time
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from tqdm import tqdm

from .advisor import ev_baseline, should_accept_deal
from .banker import OfferParams
from .board import OPEN_SCHEDULE, PRIZES
from .game import ComputerPlayer, GameLog, play_game

logger = logging.getLogger("dond_classic.simulate")

STRATEGIES = {
    "heuristic": should_accept_deal,
    "ev_baseline": ev_baseline,
}

NO_DEAL_ROUND = len(OPEN_SCHEDULE) + 1  # deal_round value used for "kept own case"


# =========================
# RUN MANY + PICK BEST
# =========================

def run_trials(
    trials: int,
    strategy: str,
    base_seed: int,
    offer_params: OfferParams = OfferParams(),
    show_progress: bool = True,
) -> Tuple[pd.DataFrame, GameLog]:
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown strategy: {strategy}")
    if trials < 1:
        raise ValueError("trials must be >= 1")

    rows = []
    best_log: Optional[GameLog] = None

    start_time = time.time()
    it = range(trials)
    if show_progress:
        it = tqdm(it, total=trials, desc=strategy, unit="game", dynamic_ncols=True)

    for t in it:
        game_seed = base_seed + t * 1009
        rng = random.Random(game_seed)
        player = ComputerPlayer(rng=random.Random(game_seed + 1), decide=STRATEGIES[strategy], strategy=strategy)
        glog = play_game(player, rng=rng, seed=game_seed, offer_params=offer_params)

        rows.append({
            "strategy": strategy,
            "seed": glog.seed,
            "chosen_value": glog.chosen_value,
            "winnings": glog.winnings,
            "deal_round": glog.deal_round if glog.deal_round is not None else NO_DEAL_ROUND,
        })

        if best_log is None or glog.winnings > best_log.winnings:
            best_log = glog

    elapsed = time.time() - start_time
    logger.info("%s: %d games in %.1fs", strategy, trials, elapsed)

    df = pd.DataFrame(rows)
    assert best_log is not None
    return df, best_log


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    return df.groupby("strategy")["winnings"].describe(percentiles=[0.1, 0.25, 0.5, 0.75, 0.9])


# =========================
# PLOTTING
# =========================

def save_distribution_chart(df: pd.DataFrame, out_prefix: str) -> None:
    # prizes span eight orders of magnitude, so bin on a log scale
    bins = np.geomspace(min(PRIZES), max(PRIZES), 60)
    plt.figure(figsize=(10, 5))
    for strat in df["strategy"].unique():
        subset = df[df["strategy"] == strat]["winnings"].values
        plt.hist(np.clip(subset, bins[0], bins[-1]), bins=bins, alpha=0.55, label=strat)
    plt.xscale("log")
    plt.xlabel("Winnings ($)")
    plt.ylabel("Frequency")
    plt.title("Distribution of Winnings")
    plt.legend()
    plt.tight_layout()
    plt.savefig(f"{out_prefix}_win_distribution.png", dpi=160)
    plt.close()


def deal_timing_table(df: pd.DataFrame) -> pd.DataFrame:
    """Share of games ending in each round per strategy; kept-own-case games last."""
    timing = pd.crosstab(df["strategy"], df["deal_round"], normalize="index").sort_index(axis=1)
    return timing.rename(columns=lambda r: "No deal" if r == NO_DEAL_ROUND else f"R{r}")


def save_deal_timing_chart(df: pd.DataFrame, out_prefix: str) -> None:
    timing = deal_timing_table(df)
    colors = [
        "0.6" if col == "No deal" else plt.cm.viridis(i / max(1, len(OPEN_SCHEDULE) - 1))
        for i, col in enumerate(timing.columns)
    ]
    ax = timing.plot(kind="barh", stacked=True, figsize=(10, 4), color=colors)
    ax.set_title("When each strategy stops (grey = kept own case)")
    ax.set_xlabel("Share of games")
    ax.set_ylabel("Strategy")
    ax.legend(ncol=len(timing.columns), fontsize=7, loc="lower center", bbox_to_anchor=(0.5, 1.08))
    plt.tight_layout()
    plt.savefig(f"{out_prefix}_deal_timing.png", dpi=160)
    plt.close()


def save_replay_timeline(best: GameLog, out_prefix: str) -> None:
    rounds = list(range(1, len(best.offer_by_round) + 1))
    pcts = [offer / ev * 100 if ev > 0 else 0.0 for offer, ev in zip(best.offer_by_round, best.ev_by_round)]

    fig, (ax_money, ax_pct) = plt.subplots(2, 1, figsize=(10, 7), sharex=True)
    ax_money.plot(rounds, best.ev_by_round, marker="o", label="EV (remaining)")
    ax_money.plot(rounds, best.offer_by_round, marker="o", label="Bank offer")
    ax_money.axhline(best.chosen_value, color="0.4", linestyle="--", label=f"Own case ${best.chosen_value:,.0f}")
    if best.deal_round is not None:
        ax_money.scatter([best.deal_round], [best.winnings], s=160, marker="*", color="red", zorder=3, label="DEAL")
    ax_money.set_yscale("symlog", linthresh=1000)
    ax_money.set_ylabel("Dollars ($)")
    ax_money.legend()

    ax_pct.bar(rounds, pcts, color=["red" if d else "C1" for d in best.deal_decision_by_round])
    ax_pct.set_ylabel("Offer / EV (%)")
    ax_pct.set_xticks(rounds)
    ax_pct.set_xticklabels([f"{r}\n(-{n})" for r, n in zip(rounds, OPEN_SCHEDULE)])
    ax_pct.set_xlabel("Round (cases opened)")

    fig.suptitle(f"Best game - {best.strategy} - case {best.player_case + 1} - winnings ${best.winnings:,.2f}")
    fig.tight_layout()
    fig.savefig(f"{out_prefix}_best_replay_timeline.png", dpi=160)
    plt.close(fig)


# =========================
# REPLAY
# =========================

def replay_lines(best: GameLog) -> List[str]:
    lines = [
        "",
        "=" * 80,
        f"BEST GAME REPLAY - strategy={best.strategy} seed={best.seed}",
        f"Chosen case {best.player_case + 1} value (hidden during play): ${best.chosen_value:,.2f}",
        "=" * 80,
    ]
    for i in range(len(best.offer_by_round)):
        decision = "DEAL" if best.deal_decision_by_round[i] else "NO DEAL"
        lines += [
            "",
            f"Round {i + 1} (opened {OPEN_SCHEDULE[i]}):",
            f"  Opened: {', '.join(f'${x:,.2f}' for x in best.opened_by_round[i])}",
            f"  Remaining count: {len(best.remaining_by_round[i])} | EV: ${best.ev_by_round[i]:,.2f}",
            f"  Bank offer: ${best.offer_by_round[i]:,.2f} -> {decision}",
        ]

    if best.deal_round is None:
        lines.append(f"\nFinal: NO DEAL taken. Revealed chosen case = ${best.chosen_value:,.2f}")
    else:
        lines.append(f"\nResult: DEAL in round {best.deal_round} for ${best.winnings:,.2f}")
    return lines


def write_replay_json(best: GameLog, offer_params: OfferParams, path: str) -> None:
    replay_dict: Dict[str, object] = best.to_dict()
    replay_dict.update({
        "open_schedule": OPEN_SCHEDULE,
        "prizes": PRIZES,
        "offer_params": {
            "base": offer_params.base,
            "step": offer_params.step,
            "cap": offer_params.cap,
        },
    })
    with open(path, "w", encoding="utf-8") as f:
        json.dump(replay_dict, f, indent=2)


# =========================
# DRIVER
# =========================

def run_simulation(
    trials: int,
    out: str,
    seed: int,
    offer_params: OfferParams = OfferParams(),
    show_progress: bool = True,
    charts: bool = True,
) -> List[str]:
    """Run every strategy, write the reports and return the files written."""
    frames = []
    bests = []
    for strategy in STRATEGIES:
        df_s, best_s = run_trials(trials, strategy, seed, offer_params, show_progress)
        frames.append(df_s)
        bests.append(best_s)

    df = pd.concat(frames, ignore_index=True)
    summary = summarize(df)

    written = [f"{out}_raw.csv", f"{out}_summary.csv"]
    df.to_csv(written[0], index=False)
    summary.to_csv(written[1])

    best = max(bests, key=lambda g: g.winnings)
    write_replay_json(best, offer_params, f"{out}_best_replay.json")
    written.append(f"{out}_best_replay.json")

    if charts:
        save_distribution_chart(df, out)
        save_deal_timing_chart(df, out)
        save_replay_timeline(best, out)
        written += [
            f"{out}_win_distribution.png",
            f"{out}_deal_timing.png",
            f"{out}_best_replay_timeline.png",
        ]

    print(summary)
    print("\n".join(replay_lines(best)))

    print("\nSaved:")
    for path in written:
        print(f"  {path}")
    return written
