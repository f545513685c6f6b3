import io

from bagbench.interfaces import MessageWriter
from bagbench.message import Message, MessageGenerator
from bagbench.stream_writer import MessageStreamWriter


def test_write_emits_one_line_per_message():
    stream = io.StringIO()
    writer = MessageStreamWriter(stream)
    writer.open()
    writer.write(Message(123, "topic", b"abc"))
    writer.close()
    assert stream.getvalue() == "{timestamp_:123,topic:topic,bytes:3}\n"


def test_lines_match_message_text_form():
    stream = io.StringIO()
    writer = MessageStreamWriter(stream)
    messages = list(MessageGenerator(2, [("a", 5), ("b", 1)]))
    for message in messages:
        writer.write(message)
    assert stream.getvalue().splitlines() == [str(m) for m in messages]


def test_index_and_reset_leave_output_unchanged():
    stream = io.StringIO()
    writer = MessageStreamWriter(stream)
    writer.write(Message(1, "t", b""))
    before = stream.getvalue()
    writer.create_index()
    writer.reset()
    assert stream.getvalue() == before
    assert isinstance(writer, MessageWriter)


def test_write_to_file(tmp_path):
    path = tmp_path / "out.txt"
    with path.open("w") as handle:
        writer = MessageStreamWriter(handle)
        writer.write(Message(7, "x", b"12"))
        writer.write(Message(8, "y", b""))
    assert path.read_text().splitlines() == [
        str(Message(7, "x", b"12")),
        str(Message(8, "y", b"")),
    ]