"""Tabular summary of tour runs (pandas), with CSV/JSON export."""
from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from ..tsp.solver import TourResult

COLUMNS = ['instance', 'n', 'mode', 'cost', 'complete', 'path_len', 'edges', 'runtime']


@dataclass
class RunRecord:
    instance: str
    n: int
    mode: str
    cost: float
    complete: bool
    path_len: int
    edges: int
    runtime: float

    @classmethod
    def from_result(cls, instance: str, n: int, result: TourResult) -> 'RunRecord':
        return cls(
            instance=instance,
            n=n,
            mode=result.mode,
            cost=result.cost,
            complete=result.complete,
            path_len=len(result.path),
            edges=len(result.selected_edges),
            runtime=result.runtime,
        )


def results_frame(records: Iterable[RunRecord]) -> pd.DataFrame:
    rows = [r.__dict__ for r in records]
    return pd.DataFrame(rows, columns=COLUMNS)


def save_results(df: pd.DataFrame, out_dir: str, prefix: str = 'greedy_tour',
                 timestamp: Optional[str] = None) -> Tuple[str, str]:
    """Write the frame as <prefix>_results_<timestamp>.csv/.json; returns both paths."""
    os.makedirs(out_dir, exist_ok=True)
    timestamp = timestamp or time.strftime('%Y%m%d_%H%M%S')
    base = os.path.join(out_dir, f"{prefix}_results_{timestamp}")
    csv_file = f"{base}.csv"
    json_file = f"{base}.json"
    df.to_csv(csv_file, index=False)
    df.to_json(json_file, orient='records', indent=2)
    return csv_file, json_file


def mode_summary(df: pd.DataFrame) -> pd.DataFrame:
    """Per-mode aggregates: instance count, closed tours, mean cost and runtime."""
    if df.empty:
        return pd.DataFrame(columns=['mode', 'instances', 'complete', 'cost_mean', 'runtime_mean'])
    grp = df.groupby('mode')
    return grp.agg(
        instances=('instance', 'nunique'),
        complete=('complete', 'sum'),
        cost_mean=('cost', 'mean'),
        runtime_mean=('runtime', 'mean'),
    ).reset_index()


def print_summary(df: pd.DataFrame) -> None:
    print("\n" + "=" * 60)
    print("GREEDY TOUR SUMMARY")
    print("=" * 60)
    if df.empty:
        print("No results")
        return
    print(f"Total instances: {df['instance'].nunique()}")
    incomplete: List[str] = sorted(set(df.loc[~df['complete'].astype(bool), 'instance']))
    if incomplete:
        print(f"Instances without a closed tour: {', '.join(incomplete)}")
    print(mode_summary(df).to_string(index=False))
