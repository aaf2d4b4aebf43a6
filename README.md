# dckit

A small library of building blocks:

- `dckit.utf8` encodes a code point to UTF-8 bytes with `encode`.
  `decode(data, offset)` returns `(code_point, size)` for the code point at
  `offset`. `validate(data, offset)` returns the sequence size that a byte
  announces, or `None` for a continuation byte.
- `dckit.text` has two byte-oriented classes. `String` is mutable and
  `StringView` is read-only. Sizes and offsets are in bytes, and `length()`
  counts code points. Both classes have `substring`, `find` (a pattern
  search) and `find_byte`. Both return `None` when nothing is found.
  `String` also has `append`, `insert`, `assign`, `resize`, `clone`, `view`,
  `ends_with` and `+=`. `+=` takes text, bytes or a single byte value.
  `Utf8Iterator` walks code points and can go forwards with `advance()` and
  backwards with `retreat()`.
- `dckit.mac` has `mac_to_string`. It formats six bytes, or an unsigned
  64-bit integer (low bytes first), as `AA:BB:CC:DD:EE:FF`.
  `u8_to_hex_char` gives the hex digit of one nibble of a byte.
- `dckit.clock` has:
  - `get_time_ns()` and `get_time_us()`, which read the monotonic clock;
  - `sleep_ms()`, which clamps to `MAX_SLEEP_MS`;
  - `make_timestamp()`, which returns a UTC `Timestamp`;
  - `Stopwatch`.

  The `Stopwatch` starts when it is created. Its `ns/us/ms/s/fs` methods give
  the time from start to stop, and `now_*` gives the time from start to now.
- `dckit.log` has `Logger`, which queues `Payload`s and hands them to its
  sinks on a background thread. Only payloads at or above the logger's
  `Level` are passed on. Two sinks are included: `ConsoleSink` and
  `ColoredConsoleSink`.

## Install

```
pip install .
```

## Examples

```python
from dckit import utf8
from dckit.text import String

s = String()
s += utf8.encode(0x1F525)
s += "abc"
assert s.length() == 4
assert len(s) == 7
assert s.find("abc") == 4
```

```python
from dckit.mac import mac_to_string

print(mac_to_string(bytes([0x02, 0x00, 0x00, 0xAB, 0xCD, 0xEF])))
# 02:00:00:AB:CD:EF
```

```python
from dckit.clock import Stopwatch

watch = Stopwatch()
# ... work ...
watch.stop()
print(watch.ms(), "ms")
```

```python
from dckit.log import Level, Logger

lines = []
logger = Logger(lambda payload, level: lines.append(payload.message), "memory")
logger.set_level(Level.INFO)
logger.start()
logger.log(Level.INFO, "hello {}", "world")
logger.stop(100_000)
assert lines == ["hello world"]
```

### Levels

The levels are, in order: `VERBOSE`, `INFO`, `WARNING`, `ERROR`, `RAW` and
`NONE`. A logger set to `NONE` passes nothing on.

The console sinks handle `RAW` messages differently from the others. A `RAW`
message is written as it is, with no prefix and no newline.

### Logger lifecycle

`Logger()` with no sink writes to a `ConsoleSink` attached under the name
`"console"`.

- `attach_sink(sink, name)` adds a sink.
- `detach_sink(name)` removes every sink attached under `name`.
- `stop(timeout_us)` shuts the logger thread down. It hands the queued
  backlog to the sinks, then returns whether the thread finished in time.

### Console sink options

`ConsoleSink` has these options: `stream` (stdout by default),
`show_datetime`, `show_level`, `show_filestamp` and `show_function`.

### The process-wide logger

`get_global_logger()` returns the process-wide logger. These functions work
on it when no logger is given:

- `init(logger)` starts it;
- `deinit(timeout_us, logger)` stops it;
- `set_level(level, logger)` sets its level.

## What it does not do

The package is a library only. It installs no command. It has no helpers for
reading or writing files.

## Tests

```
pip install .[test]
pytest
```