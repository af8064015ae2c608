# visindigo

Building blocks for console applications in plain Python, with no
third-party dependencies.

## Modules

- `visindigo.console` – ANSI colour and style strings (`get_color_string`
  with `Color`, `RGBColor` and `Style`; `in_warning_style`, `in_error_style`,
  `in_success_style`, `in_notice_style`), output to standard error
  (`print_line`), line input (`get_line`), hex dumps (`format_binary`,
  `print_binary`), running a shell command (`exec_command`) and colour
  helpers (`to_rgb_string`, `to_rgba_string`, `reverse_color`,
  `is_light_color`).
- `visindigo.exceptions` – `VisindigoError` with a reason and a help text,
  and its subclasses `DimensionError`, `SingletonError` and
  `NullPointerError`; `report_lines` and `print_report` give a coloured
  report.
- `visindigo.version` – `Version`, a major.minor.patch version with
  `from_string`, `get_version_string`, `is_newer_than`, `is_older_than` and
  the `<` / `>` operators.
- `visindigo.mathtools` – `combination`, `permutation`, easing curves
  (`sin_0_1`, `cos_1_n1`, `sin2_0_1`, `sin_0_1_0`, `simple_transformation`)
  and `simpson` integration over a one-dimensional `MathFunction`.
- `visindigo.command` – `CommandHost`, which dispatches command lines
  (including `|` pipelines) to `CommandHandler` subclasses and can listen on
  standard input in a background thread, plus the string helpers it uses:
  `blank_splitter`, `scientific_splitter`, `get_indent_level`,
  `get_indent_count`, `remove_indent`, `standardize_indent`.
- `visindigo.translation` – `TranslationDocument` (files of `key:value`
  lines), `TranslatableObject`, `TranslationSubHost` (current and default
  document per package) and `TranslationHost`, which relays language
  changes; languages are listed in `Language`.
- `visindigo.riff` – `RiffChunk`, a reader for RIFF containers, with
  `from_bytes`, `from_file`, `tree_lines`, `print_tree` and
  `get_data_of_chunk` (by four-character id or a path of ids).
- `visindigo.diff` – `analyze` and `analyze_files`, a greedy line matcher
  that reports removed and added line indices in a `DifferenceData`, and
  `format_difference` / `debug_print`.
- `visindigo.pathinfo` – common paths (`get_working_path`, `get_home_path`,
  `get_temp_path`, …), `get_size_of` for directories, `get_readable_size`
  (`"1.50KiB"` style), `files_filter` with wildcard patterns, and
  `open_explorer` / `open_browser`.
- `visindigo.duration` – nanosecond clock helpers, `Duration` (time between
  calls) and `BehaviorDuration` (elapsed time against a limit).
- `visindigo.behavior` – `BehaviorHost`, a tick loop that runs
  `BasicBehavior`, `TimedBehavior` and `AnimationBehavior` objects, either
  every tick or spread over fixed-rate sub hosts (`QuantifyTickType.T20`,
  `T32`, `T64`, `T128`).
- `visindigo.arcp` – the Application Remote Call Protocol:
  - `protocol`: wire constants, `Status` codes, `status_str`, `ArcpError`
    and the chunk layouts;
  - `types`: type names and `from_*` / `to_*` conversions between values
    and data chunks;
  - `dataobject`: `CallDataObject` and `ReturnDataObject` messages;
  - `connection`: `ChunkStreamParser` and the asyncio `ArcpConnection`;
  - `remote`: `RemoteCallRouter` (answers calls) and `RemoteCaller`
    (makes them);
  - `peer`: `PeerPort`, which listens, routes incoming calls by function
    name and matches replies to outstanding callers.

## Examples

Versions:

```python
from visindigo.version import Version

current = Version.from_string("1.2")
current.get_version_string()            # "1.2.0"
Version.from_string("1.3.0") > current  # True
```

Splitting command lines and dotted paths:

```python
from visindigo.command import blank_splitter, scientific_splitter

blank_splitter('echo "hello world" | upper')
# ['echo', 'hello world', '|', 'upper']

scientific_splitter(r"a.b\.c", ".")
# ['a', 'b.c']
```

Handling commands: subclass `CommandHandler`, implement `handle_command`
(read `named_args` and `unnamed_args`, set `command_output`, return
`True` on success), register it with `CommandHost.add_command_handler`, and
pass lines to `CommandHost.handle_command`. The output of one command is
appended to the unnamed arguments of the next one after a `|`.

Ticking behaviours:

```python
from visindigo.behavior import BasicBehavior, BehaviorHost

class Counter(BasicBehavior):
    ticks = 0

    def on_tick(self):
        self.ticks += 1

host = BehaviorHost()
counter = Counter(host)
counter.start()
host.run(max_ticks=3)   # returns 3; counter.ticks is now 3
```

Typed ARCP parameters:

```python
from visindigo.arcp.types import from_string, to_string

chunk = from_string("hello")
to_string(chunk)                    # "hello"
```

A reply to a remote call comes from a `RemoteCallRouter` subclass that
implements `on_remote_call` and is registered with
`PeerPort.register_router`; after `await port.start()` the peer accepts
connections, and `await port.connect_to_server(host, port)` opens one to
another peer.

## What it does not do

There is no settings storage: the package has no JSON configuration
document or other persistence, so applications keep their own settings.
There is also no application object that loads packages or plug-ins, and
no command-line program is installed; everything is used as a library.

## Running the tests

Install the `test` extra and run pytest from the project root.