"""Run the MIN and MAX tours side by side in worker processes.

Each mode owns at most one in-flight worker. Submitting new input terminates
the previous worker for every mode before starting the next one, and results
carry the generation they were computed for, so anything produced for an
older input is dropped instead of overwriting a newer result.
"""
from __future__ import annotations

import time
from multiprocessing import Pipe, Process, connection
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .tsp.greedy_edge import MODES, Edge, check_mode
from .tsp.solver import TourResult, compute_greedy_tour

DEFAULT_TIMEOUT = 60.0


def _solve_into_pipe(edges, num_nodes, mode, close_open_path, generation, conn):
    try:
        result = compute_greedy_tour(edges, num_nodes, mode, close_open_path=close_open_path)
        conn.send((generation, mode, result, None))
    except Exception as e:  # pragma: no cover - reported to the parent
        conn.send((generation, mode, None, f"{e.__class__.__name__}: {e}"))
    finally:
        conn.close()


class TourDispatcher:
    """One result slot per mode, last write wins."""

    def __init__(self, modes: Iterable[str] = MODES, close_open_path: bool = False):
        self.modes: Tuple[str, ...] = tuple(check_mode(m) for m in modes)
        self.close_open_path = close_open_path
        self.generation = 0
        self.results: Dict[str, TourResult] = {}
        self.errors: Dict[str, str] = {}
        self._workers: Dict[str, Tuple[Process, object]] = {}
        self._closed = False

    def submit(self, edges: Sequence[Edge], num_nodes: int) -> int:
        if self._closed:
            raise RuntimeError("TourDispatcher is closed")
        self.generation += 1
        edges = list(edges)
        for mode in self.modes:
            self.cancel(mode)
            self.results.pop(mode, None)
            self.errors.pop(mode, None)
            recv_conn, send_conn = Pipe(duplex=False)
            p = Process(
                target=_solve_into_pipe,
                args=(edges, num_nodes, mode, self.close_open_path, self.generation, send_conn),
                daemon=True,
            )
            p.start()
            # child holds the only live write end
            send_conn.close()
            self._workers[mode] = (p, recv_conn)
        return self.generation

    def cancel(self, mode: str) -> None:
        entry = self._workers.pop(check_mode(mode), None)
        if entry is None:
            return
        proc, conn = entry
        if proc.is_alive():
            proc.terminate()
        proc.join()
        conn.close()

    def pending(self) -> List[str]:
        return [m for m in self.modes if m in self._workers]

    def collect(self, timeout: Optional[float] = None) -> Optional[Tuple[str, TourResult]]:
        """Next fresh (mode, result) in completion order, or None on timeout."""
        deadline = None if timeout is None else time.time() + timeout
        while self._workers:
            remaining = None if deadline is None else max(0.0, deadline - time.time())
            by_conn = {conn: mode for mode, (_p, conn) in self._workers.items()}
            ready = connection.wait(list(by_conn), timeout=remaining)
            if not ready:
                return None
            for conn in ready:
                mode = by_conn[conn]
                proc, _ = self._workers.pop(mode)
                try:
                    generation, _mode, result, error = conn.recv()
                except EOFError:
                    generation, result, error = self.generation, None, f"worker exited with code {proc.exitcode}"
                conn.close()
                proc.join()
                if generation != self.generation:
                    continue
                if error is not None:
                    self.errors[mode] = error
                    continue
                self.results[mode] = result
                return mode, result
        return None

    def wait(self, timeout: Optional[float] = DEFAULT_TIMEOUT) -> Dict[str, TourResult]:
        """Block until every mode of the current submission reported (or timeout)."""
        deadline = None if timeout is None else time.time() + timeout
        while self._workers:
            remaining = None if deadline is None else max(0.0, deadline - time.time())
            if self.collect(remaining) is None and self._workers:
                break
        return dict(self.results)

    def close(self) -> None:
        for mode in list(self._workers):
            self.cancel(mode)
        self._closed = True

    def __enter__(self) -> 'TourDispatcher':
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def solve_modes(edges: Sequence[Edge], num_nodes: int, modes: Iterable[str] = MODES, parallel: bool = True,
                close_open_path: bool = False, timeout: Optional[float] = DEFAULT_TIMEOUT) -> Dict[str, TourResult]:
    """Compute one tour per mode; worker processes when ``parallel`` else in-process."""
    modes = tuple(check_mode(m) for m in modes)
    if not parallel:
        return {m: compute_greedy_tour(edges, num_nodes, m, close_open_path=close_open_path) for m in modes}
    with TourDispatcher(modes, close_open_path=close_open_path) as dispatcher:
        dispatcher.submit(edges, num_nodes)
        results = dispatcher.wait(timeout)
        if dispatcher.errors:
            mode, msg = next(iter(dispatcher.errors.items()))
            raise RuntimeError(f"{mode} worker failed: {msg}")
        missing = [m for m in modes if m not in results]
        if missing:
            raise RuntimeError(f"Timed out waiting for modes {missing}")
        return results
