import sqlite3

from bagbench.cli import sqlite_main, trivial_main


def test_sqlite_main_wrong_argument_count(capsys):
    assert sqlite_main(["only", "two"]) == 1
    assert "Usage: benchmark <database file name>" in capsys.readouterr().err


def test_trivial_main_wrong_argument_count(capsys):
    assert trivial_main([]) == 1
    assert "Usage: benchmark <text file name>" in capsys.readouterr().err


def test_sqlite_main_runs(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert sqlite_main(["bench.db", "5", "8", "2"]) == 0
    with sqlite3.connect(tmp_path / "bench.db") as conn:
        rows = conn.execute("SELECT TOPIC, LENGTH(DATA) FROM MESSAGES").fetchall()
    assert rows == [("topic", 8)] * 5
    csv_lines = (tmp_path / "sqlite3_writer_benchmark.csv").read_text().splitlines()
    assert len(csv_lines) == 2
    assert csv_lines[0].endswith("disk usage (bytes)")


def test_trivial_main_runs(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert trivial_main(["out.txt", "3", "4"]) == 0
    lines = (tmp_path / "out.txt").read_text().splitlines()
    assert len(lines) == 3
    assert all("topic:topic,bytes:4" in line for line in lines)
    csv_lines = (tmp_path / "trivial_writer_benchmark.csv").read_text().splitlines()
    assert len(csv_lines) == 2
    assert csv_lines[1].split(",")[-1] == str((tmp_path / "out.txt").stat().st_size)


def test_sqlite_main_rejects_non_numbers(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert sqlite_main(["bench.db", "many", "8", "2"]) == 1
    assert "Invalid number" in capsys.readouterr().err
    assert not (tmp_path / "sqlite3_writer_benchmark.csv").exists()


def test_trivial_main_rejects_non_numbers(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert trivial_main(["out.txt", "3", "big"]) == 1
    assert not (tmp_path / "trivial_writer_benchmark.csv").exists()