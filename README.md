# bagbench

Tools for measuring how fast a stream of recorded messages can be written to
storage, plus helpers for printing a summary of a recorded bag and for
replaying stored messages with their original relative timing.

Messages with random payloads are produced by a generator, written through a
storage back end (a plain text stream, or SQLite in one of two table
layouts), timed by a profiler, and the results appended to a CSV file.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Command-line benchmarks

### SQLite writer

```
bagbench-sqlite <database file name> <number of messages> <message blob size> <messages per transaction>
```

Writes the given number of messages on the single topic `topic` into a
one-table SQLite database, builds its indices, and writes a header and one
result row to `sqlite3_writer_benchmark.csv` (the file is started afresh).
A transaction size of 0 writes every message outside an explicit
transaction. The database file is left in place.

### Text stream writer

```
bagbench-trivial <text file name> <number of messages> <message blob size>
```

Writes one line per message, such as
`{timestamp_:1700000000000000000,topic:topic,bytes:10}`, to the given file
and records the timings in `trivial_writer_benchmark.csv`.

Both commands print a usage line to standard error and exit with status 1
when the number of arguments is wrong, or when a count is not an integer.

### Benchmark suites

```
bagbench-small-messages
bagbench-big-messages
bagbench-mixed-messages
```

Each suite runs the one-table layout and then the separate-topic-table
layout several times, removing the database before and after every run, and
appends each run as a row to its CSV file.

| Command | CSV file | Defaults |
| --- | --- | --- |
| `bagbench-small-messages` | `small_messages_benchmark.csv` | 100,000,000 messages of 10 bytes, 10,000 per transaction, database `small_messages_writer_benchmark.db` |
| `bagbench-big-messages` | `big_messages_benchmark.csv` | 300 messages of 30,000,000 bytes, 10 per transaction, database `big_messages_benchmark.db` |
| `bagbench-mixed-messages` | `mixed_messages_benchmark.csv` | 300 loops over 1000 small (10 bytes), 100 medium (1000 bytes) and 1 big (30,000,000 bytes) topic, 10,000 per transaction, database `mixed_messages_benchmark.db` |

The single-topic suites take `--db-name`, `--messages`, `--blob-size`,
`--transaction-size` and `--repetitions` (default 5 per layout). Their CSV
file is started afresh with a header on the first run; the later runs of
both layouts are appended to it.

The mixed suite takes `--db-name`, `--loop-count`, `--small-messages`,
`--small-blob-size`, `--medium-messages`, `--medium-blob-size`,
`--big-messages`, `--big-blob-size`, `--transaction-size` and
`--repetitions` (default 3 runs for the one-table layout, 5 for the
separate-topic-table layout). Each layout starts the CSV file afresh with a
header, so when the suite finishes the file holds the separate-topic-table
runs.

With their defaults the suites write a great deal of data (up to about
10 GB per run); pass smaller numbers to try them out.

Every CSV row holds the run's metadata, the milliseconds elapsed since the
first time point for each recorded time point (start and end of writing,
progress in 10 % steps, start and end of indexing) and the final size of the
database or text file in bytes (-1 if it could not be read).

## Using the library

```python
from bagbench.benchmark import SqliteWriterBenchmark, write_csv_file
from bagbench.message import MessageGenerator
from bagbench.one_table_writer import OneTableSqliteWriter
from bagbench.profiler import Profiler

generator = MessageGenerator(1000, [("topic", 64)])
writer = OneTableSqliteWriter("bag.db", 100)
profiler = Profiler([("description", "example run")], "bag.db")

benchmark = SqliteWriterBenchmark(generator, writer, profiler)
benchmark.run()
write_csv_file("results.csv", benchmark, True)
```

The modules:

- `bagbench.message`: `Message` (timestamp in nanoseconds, topic, blob) and
  `MessageGenerator`, which yields each `(topic, blob_size)` of a
  specification in turn for a number of loops, reusing one random blob per
  topic. It can be iterated directly or driven with `has_next()`/`next()`
  and `reset()`.
- `bagbench.profiler`: `Profiler`, with `take_time_for`,
  `measure_progress` (a tick function that records every further 10 %),
  `track_disk_usage`, `csv_header` and `csv_entry`.
- `bagbench.interfaces`: the abstract `MessageWriter` and `MessageReader`.
- `bagbench.stream_writer`: `MessageStreamWriter`, one text line per
  message on a stream you own.
- `bagbench.sql`: small SQLite helpers (`open_db`, `set_pragma`,
  `create_table` with `ForeignKey` constraints, `create_index`,
  `insert_statement`, `exec_statement`).
- `bagbench.sqlite_writer`: `SqliteWriter`, the base of the SQLite writers,
  grouping writes into transactions of a fixed size and usable as a context
  manager. Writing to a writer that is not open raises `RuntimeError`.
- `bagbench.one_table_writer`: `OneTableSqliteWriter`, storing
  `MESSAGES(TIMESTAMP, TOPIC, DATA)`.
- `bagbench.separate_topic_writer`: `SeparateTopicTableSqliteWriter`,
  storing topic names in `TOPICS(ID, TOPIC)` and messages in
  `MESSAGES(TIMESTAMP, TOPIC_ID, DATA)`. It always builds the indices on
  `MESSAGES.TIMESTAMP`, `MESSAGES.TOPIC_ID` and `TOPICS.TOPIC`.
- `bagbench.benchmark`: `Benchmark`, `SqliteWriterBenchmark`,
  `TrivialWriterBenchmark` and `write_csv_file`.
- `bagbench.suites`: the functions behind the suite commands, such as
  `run_single_topic_benchmark`, `run_mixed_benchmark`, `run_repeatedly`,
  `mixed_specification`, `one_table_writer` and `separate_topic_writer`.

### Bag summaries

`bagbench.formatter` renders `BagMetadata` (made of `TopicInformation` and
`TopicMetadata` values; times in nanoseconds) as a human-readable summary:

```python
from bagbench.formatter import format_file_size

format_file_size(3195)         # "3.1 KiB"
format_file_size(1536 * 1024)  # "1.5 MiB"
```

`format_bag_meta_data` prints the summary (files, size, storage id,
duration, start and end in local time, message count and per-topic
information) to standard output and returns the printed text.
`format_file_paths` and `format_topics_with_type` return their lines as a
string, every line after the first indented.

### Replaying messages

`bagbench.player.Player` takes a reader (any object with `has_next()`,
`read_next()` returning `SerializedBagMessage`, and
`get_all_topics_and_types()` returning `TopicMetadata`), a factory
`publisher_factory(topic_name, topic_type)` returning objects with
`publish(serialized_data)`, and an optional `threading.Event` that stops
playback when set. `Player.play(PlayOptions(read_ahead_queue_size))` loads
messages in a background thread and publishes each one at the same offset
from the start as it had when recorded, logging a warning when the queue
runs dry before loading is done.

## What it does not do

- It does not connect to any messaging system: there is no recorder that
  subscribes to live topics, and the player only calls the publishers you
  give it.
- It has no reader for bag or SQLite files. `MessageReader` is an abstract
  interface only, and `Player` needs a reader you supply.
- It does not read bag metadata from disk; `BagMetadata` must be filled in
  by the caller.