# notifykit

notifykit collects pieces a small desktop notification daemon and its
companion sending tool need: log level handling, markup processing for
notification bodies, icon loading, colour and placement arithmetic, the
daemon's status flags and command-line parsing for a sender.

## Modules

- `notifykit.log`: the severity levels of `LogLevel`, `level_to_string`,
  `set_level` / `get_level`, and `set_level_from_string`, which accepts
  case-insensitive names such as `"crit"`, `"warning"`, `"mesg"`, `"info"`
  or `"deb"` and ignores (with a warning) names it does not know.
  `init_logging(testing)` installs a handler on the `notifykit` logger that
  prints `LEVEL: message` lines, warnings and worse to stderr and the rest to
  stdout; with `testing=True` it prints nothing.
- `notifykit.markup`: `MarkupMode` selects whether a body is escaped
  (`NO`), stripped of tags (`STRIP`) or kept as markup (`FULL`).
  `transform(text, mode, ignore_newline)` applies the mode and, if asked,
  turns newlines into spaces; `MarkupMode.NULL` raises `ValueError`.
  `markup_strip` removes tags and unquotes entities. `strip_a` and
  `strip_img` replace hyperlinks and images with their text (or `[image]`)
  and return the new text together with the collected `[text] url` lines,
  or `None` when there were none.
- `notifykit.icon`: `load_from_file` loads an image (expanding `~`) and
  returns `None` on failure; `load_from_icon` accepts a `file://` URI, a path
  or a name searched in each `:`-separated folder of an icon path with the
  suffixes `.svg`, `.png` and `.xpm` in that order; `icon_for_name` returns
  the image with its identifier. `icon_for_data` builds an image from raw
  notification pixel data and returns it with an MD5 identifier of the
  pixels, raising `IconError` for malformed data. `scale_icon` shrinks an
  image to a maximum side length, and `to_cairo_argb` returns premultiplied
  native-endian ARGB32 bytes. Images are Pillow images.
- `notifykit.colors`: `Color`, `hex_to_color`, `string_to_color` for
  `#rrggbb` strings, `apply_delta`, `foreground_for` (a slightly darker or
  brighter colour than a background), `separator_color` for each
  `SeparatorKind`, and `window_position`, which places a window of a given
  size on a `Screen` according to a `Geometry`.
- `notifykit.status`: `DunstStatus` with its `fullscreen`, `running` and
  `idle` flags, changed through `DunstStatus.set(field, value)` with a
  `StatusField`.
- `notifykit.cli`: `parse_commandline(argv)` turns a sender's arguments
  (without the program name) into an `Invocation`: summary, body (with
  backslash escapes resolved), `Urgency`, timeout, icon, actions, hints,
  replace and close ids and flags. It raises `UsageError` for invalid
  options or a missing summary; malformed actions and hints are logged and
  left out. Note that `-h` is the hints option; help is `-?` / `--help`.
  `parse_urgency`, `parse_action` and `parse_hint` are available on their
  own; the latter two raise `ValueError` for malformed input.

## Examples

```python
from notifykit.markup import MarkupMode, transform

assert transform("<i>foo</i><br>bar\nbaz", MarkupMode.STRIP, False) == "foo\nbar\nbaz"
assert transform("<i>foo</i><br>bar\nbaz", MarkupMode.FULL, True) == "<i>foo</i> bar baz"
```

```python
from notifykit.log import LogLevel, get_level, set_level_from_string

set_level_from_string("crit")
assert get_level() == LogLevel.CRITICAL
```

```python
from notifykit.cli import Urgency, parse_commandline, parse_hint

invocation = parse_commandline(["-u", "critical", "Hello", "World"])
assert invocation.urgency is Urgency.CRITICAL
assert (invocation.summary, invocation.body) == ("Hello", "World")
assert parse_hint("int:value:42") == ("int", "value", 42)
```

```python
from notifykit.colors import Color, string_to_color

assert string_to_color("#ff0000") == Color(1.0, 0.0, 0.0)
```

## What it does not do

notifykit does not run a notification daemon: it does not connect to the
session bus, answer or decode notification requests, emit close or action
signals, keep queues of notifications, or draw windows on a display. The
`cli` module only parses a command line; it does not send, replace or close
notifications, and the package installs no command.

## Requirements

Python 3.10 or newer and Pillow, which is used for loading, scaling and
converting icons.