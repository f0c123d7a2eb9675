from __future__ import annotations

import pytest

from greedy_tour import TourDispatcher, solve_modes


def test_solve_modes_parallel(square_edges) -> None:
    results = solve_modes(square_edges, 4, timeout=30)
    assert set(results) == {'MIN', 'MAX'}
    assert results['MIN'].cost == 40
    assert results['MAX'].cost == 50
    assert results['MAX'].path == [0, 2, 3, 1, 0]


def test_solve_modes_sequential_matches_parallel(square_edges) -> None:
    seq = solve_modes(square_edges, 4, parallel=False)
    par = solve_modes(square_edges, 4, timeout=30)
    for mode in ('MIN', 'MAX'):
        assert seq[mode].path == par[mode].path
        assert seq[mode].selected_edges == par[mode].selected_edges


def test_collect_returns_each_mode_once(square_edges) -> None:
    with TourDispatcher() as dispatcher:
        dispatcher.submit(square_edges, 4)
        seen = {}
        for _ in range(2):
            item = dispatcher.collect(timeout=30)
            assert item is not None
            mode, result = item
            seen[mode] = result.cost
        assert seen == {'MIN': 40, 'MAX': 50}
        assert dispatcher.pending() == []
        assert dispatcher.collect(timeout=0.1) is None


def test_new_submission_supersedes_previous(square_edges, chain_edges) -> None:
    with TourDispatcher() as dispatcher:
        first = dispatcher.submit(square_edges, 4)
        second = dispatcher.submit(chain_edges, 5)
        assert second == first + 1
        results = dispatcher.wait(timeout=30)
        assert results['MIN'].cost == 15
        assert results['MAX'].cost == 15
        assert not results['MIN'].complete


def test_cancel_one_mode(square_edges) -> None:
    with TourDispatcher() as dispatcher:
        dispatcher.submit(square_edges, 4)
        dispatcher.cancel('MIN')
        assert dispatcher.pending() == ['MAX']
        results = dispatcher.wait(timeout=30)
        assert set(results) == {'MAX'}


def test_single_mode_dispatcher(square_edges) -> None:
    results = solve_modes(square_edges, 4, modes=['max'], timeout=30)
    assert list(results) == ['MAX']


def test_closed_dispatcher_rejects_work(square_edges) -> None:
    dispatcher = TourDispatcher()
    dispatcher.close()
    with pytest.raises(RuntimeError):
        dispatcher.submit(square_edges, 4)


def test_unknown_mode_rejected() -> None:
    with pytest.raises(ValueError):
        TourDispatcher(modes=['MIN', 'MEDIAN'])
