"""Greedy-edge shortest/longest tours over distance tables.

Reads a labelled CSV distance table (or an AMPL .dat matrix), runs the
greedy degree-constrained edge heuristic in MIN and MAX mode side by side,
and prints both tours.

CLI examples:
    greedy-tour --file cities.csv
    greedy-tour --file cities.csv --mode MIN --json
    greedy-tour --data-dir dat/tsp --pattern 'gr*.dat' --summary --out-dir results
"""
from __future__ import annotations

import argparse
import glob
import json
import os
import sys
from typing import Dict, Iterable, List, Optional

from .analysis.report import RunRecord, print_summary, results_frame, save_results
from .dispatch import DEFAULT_TIMEOUT, solve_modes
from .parsers import load_instance
from .parsers.distance_table import CSV_EXTENSIONS, DAT_EXTENSIONS
from .tsp.greedy_edge import MODES
from .tsp.solver import TourResult
from .verify import check_tour

ROUTE_NAMES = {'MIN': 'short route', 'MAX': 'long route'}


def iter_instances(data_dir: str, pattern: Optional[str], all_flag: bool) -> List[str]:
    if pattern:
        return sorted(glob.glob(os.path.join(data_dir, pattern)))
    if all_flag:
        paths = []
        for ext in CSV_EXTENSIONS + DAT_EXTENSIONS:
            paths.extend(glob.glob(os.path.join(data_dir, '*' + ext)))
        return sorted(paths)
    raise ValueError("Provide --pattern or --all")


def _print_tour(name: str, result: TourResult, labels: List[str], steps: bool) -> None:
    status = 'closed' if result.complete else 'open'
    print(f"{name:20s} {result.mode} ({ROUTE_NAMES[result.mode]}) cost={result.cost:12.2f} "
          f"tour={status} nodes={len(result.path)} time={result.runtime:6.3f}s")
    if steps:
        for i, step in enumerate(result.labelled(labels), 1):
            print(f"    {i:3d}. {step['from']} -> {step['to']}: {step['dist']:g}")


def _report_check(name: str, result: TourResult, n: int) -> None:
    check = check_tour(result, n)
    if check.max_degree > 2:
        print(f"[error] {name} {result.mode}: node degree {check.max_degree} > 2")
    if not result.complete:
        print(f"[warn] {name} {result.mode}: no closed tour, {check.fragments} fragment(s) "
              f"from {len(result.selected_edges)} edge(s)")
    if not check.covered_by_path:
        print(f"[warn] {name} {result.mode}: path from node 0 misses part of the selected edges; "
              f"cost covers all of them")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Greedy-edge shortest/longest tour heuristic")
    ap.add_argument('--file', help='Solve a single distance table (.csv/.txt or .dat)')
    ap.add_argument('--data-dir', default='data', help='Directory for --pattern/--all')
    ap.add_argument('--pattern', help='Filename or glob pattern inside --data-dir')
    ap.add_argument('--all', action='store_true', help='Run every .csv/.txt/.dat in --data-dir')
    ap.add_argument('--mode', choices=['MIN', 'MAX', 'both'], default='both')
    ap.add_argument('--close-open-path', action='store_true',
                    help='Repeat node 0 at the end of the path even when no closed tour was found')
    ap.add_argument('--sequential', action='store_true', help='Run modes in-process instead of worker processes')
    ap.add_argument('--timeout', type=float, default=DEFAULT_TIMEOUT, help='Seconds to wait for workers')
    ap.add_argument('--max-n', type=int, help='Only solve instances with fewer nodes than this')
    ap.add_argument('--verify', action='store_true', help='Report structural checks for each tour')
    ap.add_argument('--summary', action='store_true', help='Print per-mode summary table')
    ap.add_argument('--out-dir', help='Write CSV/JSON summary of all runs here')
    ap.add_argument('--json', action='store_true', help='Emit a JSON document instead of text lines')
    return ap


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    modes = MODES if args.mode == 'both' else (args.mode,)

    if args.file:
        targets = [args.file]
    else:
        if not args.pattern and not args.all:
            args.all = True
            if not args.json:
                print(f"[info] No --file, --pattern or --all given; defaulting to all instances in {args.data_dir}")
        targets = iter_instances(args.data_dir, args.pattern, args.all)
    if not targets:
        if not args.json:
            print('[warn] no instances found')
        return 1

    records: List[RunRecord] = []
    documents: List[Dict] = []
    failed = 0
    for path in targets:
        name = os.path.basename(path)
        try:
            labels, edges, n = load_instance(path)
            if args.max_n is not None and n >= args.max_n:
                if not args.json:
                    print(f"{name:20s} skip n={n} >= {args.max_n}")
                continue
            results = solve_modes(edges, n, modes, parallel=not args.sequential,
                                  close_open_path=args.close_open_path, timeout=args.timeout)
        except Exception as e:
            failed += 1
            if not args.json:
                print(f"{name:20s} ERROR {e}")
            continue
        doc = {'instance': name, 'n': n, 'labels': labels}
        for mode in modes:
            result = results[mode]
            records.append(RunRecord.from_result(name, n, result))
            doc[mode] = result.to_dict()
            if not args.json:
                _print_tour(name, result, labels, steps=bool(args.file))
                if args.verify:
                    _report_check(name, result, n)
        documents.append(doc)

    df = results_frame(records)
    if args.json:
        print(json.dumps(documents))
    elif args.summary:
        print_summary(df)
    if args.out_dir:
        csv_file, json_file = save_results(df, args.out_dir)
        if not args.json:
            print(f"Results saved to {csv_file} and {json_file}")
    return 1 if failed else 0


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())
