from __future__ import annotations

import json
from pathlib import Path

from greedy_tour.cli import main

SQUARE_CSV = """,A,B,C,D
A,0,10,15,10
B,10,0,10,15
C,15,10,0,10
D,10,15,10,0
"""

CHAIN_CSV = """,A,B,C,D,E
A,0,5,,,
B,5,0,5,,
C,,5,0,5,
D,,,5,0,
E,,,,,0
"""


def _write(path: Path, text: str) -> str:
    path.write_text(text, encoding='utf-8')
    return str(path)


def test_json_output(tmp_path: Path, capsys) -> None:
    path = _write(tmp_path / 'square.csv', SQUARE_CSV)
    assert main(['--file', path, '--sequential', '--json']) == 0
    docs = json.loads(capsys.readouterr().out)
    assert len(docs) == 1
    doc = docs[0]
    assert doc['labels'] == ['A', 'B', 'C', 'D']
    assert doc['MIN']['cost'] == 40
    assert doc['MIN']['path'] == [0, 1, 2, 3, 0]
    assert doc['MAX']['cost'] == 50
    assert doc['MAX']['complete'] is True


def test_text_output_lists_labelled_steps(tmp_path: Path, capsys) -> None:
    path = _write(tmp_path / 'square.csv', SQUARE_CSV)
    assert main(['--file', path, '--mode', 'MIN', '--sequential', '--verify']) == 0
    out = capsys.readouterr().out
    assert 'MIN (short route)' in out
    assert 'MAX' not in out
    assert 'A -> B: 10' in out
    assert '[warn]' not in out


def test_verify_warns_on_open_tour(tmp_path: Path, capsys) -> None:
    path = _write(tmp_path / 'chain.csv', CHAIN_CSV)
    assert main(['--file', path, '--sequential', '--verify']) == 0
    out = capsys.readouterr().out
    assert 'tour=open' in out
    assert '[warn] chain.csv MIN: no closed tour, 1 fragment(s) from 3 edge(s)' in out


def test_batch_run_with_failure_and_export(tmp_path: Path, capsys) -> None:
    data = tmp_path / 'data'
    data.mkdir()
    _write(data / 'square.csv', SQUARE_CSV)
    _write(data / 'broken.csv', ",A,B\n")
    out_dir = tmp_path / 'results'
    code = main(['--data-dir', str(data), '--all', '--sequential', '--summary', '--out-dir', str(out_dir)])
    assert code == 1
    out = capsys.readouterr().out
    assert 'broken.csv' in out and 'ERROR' in out
    assert 'GREEDY TOUR SUMMARY' in out
    assert len(list(out_dir.glob('*.csv'))) == 1
    assert len(list(out_dir.glob('*.json'))) == 1


def test_max_n_skips_large_instances(tmp_path: Path, capsys) -> None:
    path = _write(tmp_path / 'square.csv', SQUARE_CSV)
    assert main(['--file', path, '--sequential', '--max-n', '4']) == 0
    assert 'skip n=4 >= 4' in capsys.readouterr().out


def test_no_instances(tmp_path: Path, capsys) -> None:
    assert main(['--data-dir', str(tmp_path), '--pattern', '*.csv']) == 1
    assert 'no instances found' in capsys.readouterr().out


def test_all_includes_txt_tables(tmp_path: Path, capsys) -> None:
    data = tmp_path / 'data'
    data.mkdir()
    _write(data / 'square.txt', SQUARE_CSV)
    assert main(['--data-dir', str(data), '--all', '--sequential', '--json']) == 0
    docs = json.loads(capsys.readouterr().out)
    assert [d['instance'] for d in docs] == ['square.txt']
