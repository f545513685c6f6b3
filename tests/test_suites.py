import sqlite3

import pytest

from bagbench.message import Message
from bagbench.separate_topic_writer import SeparateTopicTableSqliteWriter
from bagbench.suites import (
    big_messages_main,
    mixed_messages_main,
    mixed_specification,
    one_table_writer,
    run_mixed_benchmark,
    run_repeatedly,
    run_single_topic_benchmark,
    separate_topic_writer,
    single_topic_specification,
    small_messages_main,
)


def _lines(path):
    return path.read_text(encoding="utf-8").splitlines()


def _index_names(db_path):
    with sqlite3.connect(db_path) as db:
        rows = db.execute("SELECT name FROM sqlite_master WHERE type='index'").fetchall()
    return {name for (name,) in rows}


def test_single_topic_specification():
    assert single_topic_specification(7) == [("topic", 7)]


def test_mixed_specification_orders_kinds_and_numbers_topics():
    spec = mixed_specification(2, 10, 1, 20, 1, 30)
    assert spec == [
        ("topic/small/0", 10),
        ("topic/small/1", 10),
        ("topic/medium/0", 20),
        ("topic/big/0", 30),
    ]


def test_mixed_specification_empty():
    assert mixed_specification(0, 1, 0, 2, 0, 3) == []


@pytest.mark.parametrize(
    "times, with_header, expected",
    [
        (3, True, [True, False, False]),
        (2, False, [False, False]),
        (0, True, []),
    ],
)
def test_run_repeatedly_header_only_first(times, with_header, expected):
    calls = []
    run_repeatedly(times, calls.append, with_header)
    assert calls == expected


def test_run_single_topic_benchmark_writes_csv_and_removes_db(tmp_path):
    csv_file = tmp_path / "out.csv"
    db = tmp_path / "bench.db"
    writer = one_table_writer(str(db), 2)
    run_single_topic_benchmark(
        str(csv_file), "OneTableSqlite", writer, str(db), 5, 4, 2, True
    )
    lines = _lines(csv_file)
    assert len(lines) == 2
    header, entry = lines
    assert header.startswith(
        "description,number of messages,message blob size (bytes),transaction size,"
    )
    assert header.endswith("disk usage (bytes)")
    assert entry.startswith("OneTableSqlite,5,4,2,")
    assert len(header.split(",")) == len(entry.split(","))
    assert int(entry.split(",")[-1]) > 0
    assert not db.exists()


def test_run_single_topic_benchmark_appends_without_header(tmp_path):
    csv_file = tmp_path / "out.csv"
    db = tmp_path / "bench.db"
    writer = separate_topic_writer(str(db), 0)
    run_repeatedly(
        3,
        lambda header: run_single_topic_benchmark(
            str(csv_file), "SeparateTopicTableSqlite", writer, str(db), 3, 2, 0, header
        ),
        True,
    )
    lines = _lines(csv_file)
    assert len(lines) == 4
    assert lines[0].startswith("description,")
    assert all(line.startswith("SeparateTopicTableSqlite,3,2,0,") for line in lines[1:])


def test_run_mixed_benchmark_multiplies_counts_by_loops(tmp_path):
    csv_file = tmp_path / "mixed.csv"
    db = tmp_path / "mixed.db"
    writer = one_table_writer(str(db), 4)
    run_mixed_benchmark(
        str(csv_file), "OneTableSqlite", writer, str(db), 3, 2, 1, 1, 5, 1, 9, 4, True
    )
    header, entry = _lines(csv_file)
    header_fields = header.split(",")
    entry_fields = entry.split(",")
    meta = dict(zip(header_fields[:8], entry_fields[:8]))
    assert meta["description"] == "OneTableSqlite"
    assert meta["number of small messages"] == str(2 * 3)
    assert meta["small message blob size (bytes)"] == "1"
    assert meta["number of medium messages"] == "3"
    assert meta["number of big messages"] == "3"
    assert meta["big message blob size (bytes)"] == "9"
    assert meta["transaction size"] == "4"
    assert not db.exists()


def test_one_table_writer_builds_its_indices(tmp_path):
    db = tmp_path / "one.db"
    writer = one_table_writer(str(db), 2)
    writer.open()
    writer.write(Message(1, "a", b"x"))
    writer.create_index()
    writer.close()
    assert _index_names(db) >= {"TIMESTAMP_INDEX", "TOPIC_INDEX"}


def test_separate_topic_writer_builds_its_indices(tmp_path):
    db = tmp_path / "sep.db"
    writer = separate_topic_writer(str(db), 2)
    assert isinstance(writer, SeparateTopicTableSqliteWriter)
    writer.open()
    writer.write(Message(1, "a", b"x"))
    writer.write(Message(2, "a", b"y"))
    writer.create_index()
    writer.close()
    assert _index_names(db) >= {"TIMESTAMP_INDEX", "TOPIC_ID_INDEX", "TOPIC_INDEX"}
    with sqlite3.connect(db) as conn:
        assert conn.execute("SELECT COUNT(*) FROM TOPICS").fetchone() == (1,)
        assert conn.execute("SELECT COUNT(*) FROM MESSAGES").fetchone() == (2,)


def test_small_messages_main(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = small_messages_main(
        ["--messages", "3", "--blob-size", "2", "--transaction-size", "2",
         "--repetitions", "2"]
    )
    assert result == 0
    lines = _lines(tmp_path / "small_messages_benchmark.csv")
    assert len(lines) == 5
    assert [line.split(",")[0] for line in lines[1:]] == [
        "OneTableSqlite",
        "OneTableSqlite",
        "SeparateTopicTableSqlite",
        "SeparateTopicTableSqlite",
    ]
    assert not (tmp_path / "small_messages_writer_benchmark.db").exists()


def test_big_messages_main(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = big_messages_main(
        ["--messages", "2", "--blob-size", "16", "--transaction-size", "1",
         "--repetitions", "1"]
    )
    assert result == 0
    lines = _lines(tmp_path / "big_messages_benchmark.csv")
    assert len(lines) == 3
    assert lines[1].startswith("OneTableSqlite,2,16,1,")
    assert lines[2].startswith("SeparateTopicTableSqlite,2,16,1,")
    assert not (tmp_path / "big_messages_benchmark.db").exists()


def test_mixed_messages_main_second_writer_restarts_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = mixed_messages_main(
        ["--loop-count", "2", "--small-messages", "2", "--small-blob-size", "1",
         "--medium-messages", "1", "--medium-blob-size", "4", "--big-messages", "1",
         "--big-blob-size", "8", "--transaction-size", "3", "--repetitions", "2"]
    )
    assert result == 0
    lines = _lines(tmp_path / "mixed_messages_benchmark.csv")
    assert len(lines) == 3
    assert lines[0].startswith("description,number of small messages,")
    assert all(line.startswith("SeparateTopicTableSqlite,4,1,2,4,2,8,3,") for line in lines[1:])


def test_main_rejects_non_numeric_option(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit):
        small_messages_main(["--messages", "many"])
    assert not (tmp_path / "small_messages_benchmark.csv").exists()