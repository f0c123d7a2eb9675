"""Distance-table readers: CSV label matrices and AMPL .dat matrices -> edge lists."""
from __future__ import annotations

import csv
import os
from typing import Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from ..tsp.greedy_edge import Edge

CSV_EXTENSIONS = ('.csv', '.txt')
DAT_EXTENSIONS = ('.dat',)


def _parse_weight(cell) -> float:
    value = pd.to_numeric(str(cell).strip(), errors='coerce')
    if pd.isna(value):
        return float('nan')
    return float(value)


def read_distance_csv(path: str, known_labels: Optional[Iterable[str]] = None) -> Tuple[List[str], List[Edge]]:
    """Read a labelled distance table.

    Row 0 holds destination labels (from column 1 on); column 0 holds origin
    labels. Labels are trimmed, merged, optionally restricted to
    ``known_labels`` and sorted; node ids follow that order. Edges come out in
    file order, one per cell whose origin id is lower than its destination id
    and whose value is a positive finite number. Other cells are skipped.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    # rows may be ragged; size the frame by the widest one
    with open(path, 'r', newline='', encoding='utf-8') as f:
        width = max((len(r) for r in csv.reader(f)), default=0)
    if width == 0:
        raise ValueError(f"Distance table {path} is empty")
    raw = pd.read_csv(path, header=None, names=list(range(width)), dtype=str,
                      skip_blank_lines=True, keep_default_na=False).fillna('')
    rows = raw.values.tolist()
    if len(rows) < 2:
        raise ValueError(f"Distance table {path} needs a header row and at least one data row")

    header = [str(c).strip() for c in rows[0][1:]]
    seen = set(h for h in header if h)
    for row in rows[1:]:
        origin = str(row[0]).strip()
        if origin:
            seen.add(origin)
    if known_labels is not None:
        allowed = set(known_labels)
        seen = {c for c in seen if c in allowed}
    labels = sorted(seen)
    index = {label: i for i, label in enumerate(labels)}

    edges: List[Edge] = []
    for row in rows[1:]:
        origin = str(row[0]).strip()
        if origin not in index:
            continue
        u = index[origin]
        for j, dest in enumerate(header):
            if dest not in index:
                continue
            v = index[dest]
            if u >= v or j + 1 >= len(row):
                continue
            w = _parse_weight(row[j + 1])
            if np.isfinite(w) and w > 0:
                edges.append(Edge(u, v, w))
    return labels, edges


def parse_tsp_dat(path: str) -> np.ndarray:
    """Parse AMPL .dat with 'set NODES' and 'param dist :' matrix."""
    with open(path, 'r') as f:
        content = f.read().splitlines()
    rows: List[List[float]] = []
    in_matrix = False
    header_consumed = False
    for line in content:
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        if line.startswith('param dist'):
            in_matrix = True
            continue
        if not in_matrix:
            continue
        if line.startswith(';'):
            break
        parts = line.split()
        # first line after 'param dist :' is the column header
        if not header_consumed:
            header_consumed = True
            continue
        if parts[0].isdigit():
            values = []
            for tok in parts[1:]:
                if tok.startswith('#') or tok == ';':
                    break
                tok = tok.rstrip(';')
                if tok:
                    values.append(float(tok))
            rows.append(values)
            if line.endswith(';'):
                break
    dist = np.array(rows, dtype=float)
    if dist.ndim != 2 or dist.shape[0] != dist.shape[1]:
        raise ValueError(f"Distance matrix not square in {path}: {dist.shape}")
    return dist


def matrix_to_edges(dist: np.ndarray) -> List[Edge]:
    """Upper-triangle edges (row-major), keeping finite positive weights."""
    dist = np.asarray(dist, dtype=float)
    n = dist.shape[0]
    iu, iv = np.triu_indices(n, k=1)
    weights = dist[iu, iv]
    keep = np.isfinite(weights) & (weights > 0)
    return [Edge(int(u), int(v), float(w)) for u, v, w in zip(iu[keep], iv[keep], weights[keep])]


def load_instance(path: str, known_labels: Optional[Iterable[str]] = None) -> Tuple[List[str], List[Edge], int]:
    """Pick a reader from the file extension; returns (labels, edges, num_nodes)."""
    ext = os.path.splitext(path)[1].lower()
    if ext in CSV_EXTENSIONS:
        labels, edges = read_distance_csv(path, known_labels)
        return labels, edges, len(labels)
    if ext in DAT_EXTENSIONS:
        dist = parse_tsp_dat(path)
        n = dist.shape[0]
        # AMPL node sets are 1-based
        labels = [str(i + 1) for i in range(n)]
        return labels, matrix_to_edges(dist), n
    raise ValueError(f"Unsupported distance table format: {path}")
