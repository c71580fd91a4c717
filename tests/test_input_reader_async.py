import asyncio
import threading
import time

import pytest

from watchread.errors import ReaderClosedError


def test_read_async_future_resolves(input_file, make_reader):
    input_file.write_text("# waiting\n", encoding="utf-8")
    reader = make_reader(input_file)

    future = reader.read_async()
    assert not future.done()
    input_file.write_text("# waiting\n17\n", encoding="utf-8")
    assert future.result(timeout=3.0) == 17


def test_read_async_callback_receives_value(input_file, make_reader):
    input_file.write_text("# waiting\n", encoding="utf-8")
    reader = make_reader(input_file, float)
    received = []
    done = threading.Event()

    def on_value(value):
        received.append((value, threading.current_thread().name))
        done.set()

    future = reader.read_async(callback=on_value)
    input_file.write_text("1.25\n", encoding="utf-8")

    assert done.wait(timeout=3.0)
    assert future.result(timeout=1.0) == 1.25
    value, thread_name = received[0]
    assert value == 1.25
    assert thread_name.startswith("watchread-read:")


def test_read_async_is_not_cancellable(input_file, make_reader):
    input_file.write_text("# waiting\n", encoding="utf-8")
    reader = make_reader(input_file)
    future = reader.read_async()
    assert future.cancel() is False


def test_pending_and_join(input_file, make_reader):
    input_file.write_text("# waiting\n", encoding="utf-8")
    reader = make_reader(input_file)

    futures = [reader.read_async() for _ in range(3)]
    assert reader.pending() == 3
    assert reader.join(timeout=0.2) is False

    input_file.write_text("5\n", encoding="utf-8")
    assert reader.join(timeout=3.0) is True
    assert reader.pending() == 0
    assert [f.result() for f in futures] == [5, 5, 5]


def test_close_ends_outstanding_reads(input_file, make_reader):
    input_file.write_text("# never\n", encoding="utf-8")
    reader = make_reader(input_file)
    future = reader.read_async()

    time.sleep(0.05)
    assert reader.close(timeout=3.0) is True
    assert isinstance(future.exception(timeout=1.0), ReaderClosedError)


def test_callback_error_is_set_on_future(input_file, make_reader):
    input_file.write_text("3\n", encoding="utf-8")
    reader = make_reader(input_file)

    def broken(value):
        raise ValueError(f"cannot handle {value}")

    future = reader.read_async(callback=broken)
    with pytest.raises(ValueError, match="cannot handle 3"):
        future.result(timeout=3.0)
    assert reader.join(timeout=1.0)


def test_aread_from_asyncio(input_file, make_reader):
    input_file.write_text("# header\n99\n", encoding="utf-8")
    reader = make_reader(input_file)

    async def main():
        return await asyncio.wait_for(reader.aread(), timeout=3.0)

    assert asyncio.run(main()) == 99


@pytest.mark.parametrize("event_driven", [False, True])
def test_read_async_keeps_waiting_when_file_cannot_be_created(tmp_path, make_reader, event_driven):
    blocker = tmp_path / "afile"
    blocker.write_text("not a directory", encoding="utf-8")
    reader = make_reader(blocker / "in.txt", event_driven=event_driven)

    future = reader.read_async()
    time.sleep(0.3)
    assert not future.done()
    assert reader.pending() == 1

    assert reader.close(timeout=2.0) is True
    assert isinstance(future.exception(timeout=0), ReaderClosedError)


def test_read_keeps_waiting_when_file_cannot_be_created(tmp_path, make_reader):
    blocker = tmp_path / "afile"
    blocker.write_text("not a directory", encoding="utf-8")
    reader = make_reader(blocker / "in.txt", event_driven=False)
    outcome = []

    def _blocking_read():
        try:
            reader.read()
        except ReaderClosedError as e:
            outcome.append(e)

    thread = threading.Thread(target=_blocking_read)
    thread.start()
    time.sleep(0.3)
    assert thread.is_alive()

    reader.close()
    thread.join(timeout=2.0)
    assert not thread.is_alive()
    assert len(outcome) == 1
