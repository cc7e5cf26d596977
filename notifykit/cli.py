"""Command-line parsing for the notification sending tool."""

from __future__ import annotations

import argparse
import enum
import logging
import re
from dataclasses import dataclass, field
from typing import Union

__all__ = [
    "Urgency",
    "Invocation",
    "UsageError",
    "parse_urgency",
    "parse_action",
    "parse_hint",
    "parse_commandline",
]

_log = logging.getLogger(__name__)

#: Timeout that lets the server pick its default.
EXPIRES_DEFAULT = -1
DEFAULT_APPNAME = "dunstify"
PLACEHOLDER_SUMMARY = "These are not the summaries you are looking for"

_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1

_OPTION_INT = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_LEADING_INT = re.compile(r"\s*([+-]?)([0-9]*)")
_LEADING_FLOAT = re.compile(
    r"\s*([+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_ESCAPES = {"b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t", "v": "\v"}
_OCTAL = "01234567"

HintValue = Union[int, float, str]


class Urgency(enum.IntEnum):
    """The urgency of a notification."""

    LOW = 0
    NORMAL = 1
    CRITICAL = 2


class UsageError(ValueError):
    """The command line is invalid."""


@dataclass
class Invocation:
    """Everything the command line asks for."""

    appname: str = DEFAULT_APPNAME
    summary: str | None = None
    body: str | None = None
    urgency: Urgency = Urgency.NORMAL
    hints: list[tuple[str, str, HintValue]] = field(default_factory=list)
    actions: list[tuple[str, str]] = field(default_factory=list)
    timeout: int = EXPIRES_DEFAULT
    icon: str | None = None
    raw_icon: str | None = None
    capabilities: bool = False
    serverinfo: bool = False
    printid: bool = False
    replace_id: int = 0
    close_id: int = 0
    block: bool = False

    @property
    def waits(self) -> bool:
        """Whether the tool has to wait for the notification to close."""
        return self.block or bool(self.actions)


def parse_urgency(text: str) -> Urgency:
    """Map the first character of ``text`` to an urgency; unknown means normal."""
    first = text[:1]
    if first in ("l", "L", "0"):
        return Urgency.LOW
    if first in ("n", "N", "1"):
        return Urgency.NORMAL
    if first in ("c", "C", "2"):
        return Urgency.CRITICAL
    _log.warning("Unknown urgency: %s", text)
    _log.warning("Assuming normal urgency")
    return Urgency.NORMAL


def parse_action(text: str) -> tuple[str, str]:
    """Split ``"action,label"``; raises ValueError if there is no label."""
    action, comma, label = text.partition(",")
    if not comma or not label:
        raise ValueError(f'Malformed action. Expected "action,label", got "{text}"')
    return action, label


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    digits = match.group(2)
    if not digits:
        return 0
    value = int(digits)
    if match.group(1) == "-":
        value = -value
    value = max(_INT64_MIN, min(_INT64_MAX, value))
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value > _INT32_MAX else value


def _atof(text: str) -> float:
    match = _LEADING_FLOAT.match(text)
    if not match:
        return 0.0
    return float(match.group(1))


def _strtoull_to_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    digits = match.group(2)
    if not digits:
        return 0
    value = int(digits)
    if value > _UINT64_MAX:
        value = _UINT64_MAX
    elif match.group(1) == "-":
        value = (-value) & _UINT64_MAX
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value > _INT32_MAX else value


def parse_hint(text: str) -> tuple[str, str, HintValue]:
    """Parse ``"type:name:value"`` into the type, the name and the typed value.

    The type is one of ``int``, ``double``, ``string`` or ``byte``.
    Raises ValueError for malformed hints and bytes out of range.
    """
    parts = text.split(":", 2)
    if len(parts) < 3 or not parts[2]:
        raise ValueError(f'Malformed hint. Expected "type:name:value", got "{text}"')
    kind, name, value = parts
    if kind == "int":
        return kind, name, _atoi(value)
    if kind == "double":
        return kind, name, _atof(value)
    if kind == "string":
        return kind, name, value
    if kind == "byte":
        number = _strtoull_to_int(value)
        if not 0 <= number <= 0xFF:
            raise ValueError(f'Not a byte: "{value}"')
        return kind, name, number
    raise ValueError(
        f"Malformed hint. Expected a type of int, double, string or byte, got {kind}"
    )


def _strcompress(text: str) -> str:
    out = []
    pos = 0
    while pos < len(text):
        char = text[pos]
        if char != "\\":
            out.append(char)
            pos += 1
            continue
        pos += 1
        if pos >= len(text):
            _log.warning("Trailing \\ in body")
            break
        char = text[pos]
        if char in _OCTAL:
            value = 0
            stop = pos + 3
            while pos < len(text) and pos < stop and text[pos] in _OCTAL:
                value = value * 8 + int(text[pos])
                pos += 1
            out.append(chr(value & 0xFF))
        else:
            out.append(_ESCAPES.get(char, char))
            pos += 1
    return "".join(out)


def _int_option(text: str) -> int:
    match = _OPTION_INT.fullmatch(text)
    if not match:
        raise argparse.ArgumentTypeError(f"Cannot parse integer value '{text}'")
    value = int(match.group(2), 0 if match.group(2)[:2].lower() == "0x" else 8
                if match.group(2).startswith("0") and len(match.group(2)) > 1 else 10)
    if match.group(1) == "-":
        value = -value
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise argparse.ArgumentTypeError(f"Integer value '{text}' out of range")
    return value


class _Parser(argparse.ArgumentParser):
    def error(self, message: str):  # type: ignore[override]
        raise UsageError(f"Invalid commandline: {message}")


def _build_parser() -> _Parser:
    parser = _Parser(prog="dunstify", description="- Dunstify", add_help=False)
    parser.add_argument("-?", "--help", action="help", help="Show help options")
    parser.add_argument("-a", "--appname", default=DEFAULT_APPNAME, metavar="NAME",
                        help="Name of your application")
    parser.add_argument("-u", "--urgency", metavar="URG",
                        help="The urgency of this notification")
    parser.add_argument("-h", "--hints", action="append", default=[], metavar="HINT",
                        help="User specified hints")
    parser.add_argument("-A", "--action", action="append", default=[], metavar="ACTION",
                        help="Actions the user can invoke")
    parser.add_argument("-t", "--timeout", type=_int_option, default=EXPIRES_DEFAULT,
                        metavar="TIMEOUT",
                        help="The time until the notification expires")
    parser.add_argument("-i", "--icon", metavar="ICON",
                        help="An Icon that should be displayed with the notification")
    parser.add_argument("-I", "--raw_icon", metavar="RAW_ICON",
                        help="Path to the icon to be sent as raw image data")
    parser.add_argument("-c", "--capabilities", action="store_true",
                        help="Print the server capabilities and exit")
    parser.add_argument("-s", "--serverinfo", action="store_true",
                        help="Print server information and exit")
    parser.add_argument("-p", "--printid", action="store_true",
                        help="Print id, which can be used to update/replace this notification")
    parser.add_argument("-r", "--replace", type=_int_option, default=0, metavar="ID",
                        help="Set id of this notification.")
    parser.add_argument("-C", "--close", type=_int_option, default=0, metavar="ID",
                        help="Close the notification with the specified ID")
    parser.add_argument("-b", "--block", action="store_true",
                        help="Block until notification is closed and print close reason")
    parser.add_argument("args", nargs="*", metavar="SUMMARY [BODY]")
    return parser


def parse_commandline(argv: list[str]) -> Invocation:
    """Parse the arguments (without the program name) into an Invocation.

    Raises UsageError for an invalid command line or a missing summary.
    Malformed actions and hints are reported and left out.
    """
    options = _build_parser().parse_intermixed_args(list(argv))

    invocation = Invocation(
        appname=options.appname,
        timeout=options.timeout,
        icon=options.icon,
        raw_icon=options.raw_icon,
        capabilities=options.capabilities,
        serverinfo=options.serverinfo,
        printid=options.printid,
        replace_id=options.replace & 0xFFFFFFFF,
        close_id=options.close & 0xFFFFFFFF,
        block=options.block,
    )
    if invocation.capabilities or invocation.serverinfo:
        return invocation

    positional = options.args
    if not positional and invocation.close_id < 1:
        raise UsageError("I need at least a summary")
    invocation.summary = positional[0] if positional else PLACEHOLDER_SUMMARY
    if len(positional) > 1:
        invocation.body = _strcompress(positional[1])

    if options.urgency is not None:
        invocation.urgency = parse_urgency(options.urgency)

    for text in options.action:
        try:
            invocation.actions.append(parse_action(text))
        except ValueError as exc:
            _log.warning("%s", exc)
    for text in options.hints:
        try:
            invocation.hints.append(parse_hint(text))
        except ValueError as exc:
            _log.warning("%s", exc)
    return invocation