import pytest

from notifykit.cli import (
    Invocation,
    Urgency,
    UsageError,
    parse_action,
    parse_commandline,
    parse_hint,
    parse_urgency,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("low", Urgency.LOW), ("L", Urgency.LOW), ("0", Urgency.LOW),
        ("normal", Urgency.NORMAL), ("N", Urgency.NORMAL), ("1", Urgency.NORMAL),
        ("critical", Urgency.CRITICAL), ("C", Urgency.CRITICAL), ("2", Urgency.CRITICAL),
    ],
)
def test_parse_urgency(text, expected):
    assert parse_urgency(text) is expected


@pytest.mark.parametrize("text", ["x", "", "9"])
def test_unknown_urgency_is_normal(text):
    assert parse_urgency(text) is Urgency.NORMAL


def test_parse_action_splits_at_first_comma():
    assert parse_action("open,Open it, now") == ("open", "Open it, now")


@pytest.mark.parametrize("text", ["nocomma", "trailing,"])
def test_parse_action_malformed(text):
    with pytest.raises(ValueError):
        parse_action(text)


def test_parse_hint_types():
    assert parse_hint("int:volume:42") == ("int", "volume", 42)
    assert parse_hint("double:ratio:1.5") == ("double", "ratio", 1.5)
    assert parse_hint("string:category:a:b") == ("string", "category", "a:b")
    assert parse_hint("byte:urgency:2") == ("byte", "urgency", 2)


def test_parse_hint_int_like_atoi():
    assert parse_hint("int:n:12abc")[2] == 12
    assert parse_hint("int:n:abc")[2] == 0


@pytest.mark.parametrize(
    "text",
    ["int", "int:", "int:name", "int:name:", "bool:name:1", "byte:b:300"],
)
def test_parse_hint_malformed(text):
    with pytest.raises(ValueError):
        parse_hint(text)


def test_defaults():
    invocation = parse_commandline(["summary"])
    assert invocation == Invocation(summary="summary")
    assert invocation.appname == "dunstify"
    assert invocation.timeout == -1
    assert invocation.waits is False


def test_missing_summary_is_an_error():
    with pytest.raises(UsageError):
        parse_commandline([])


def test_close_without_summary_uses_placeholder():
    invocation = parse_commandline(["-C", "5"])
    assert invocation.close_id == 5
    assert invocation.summary == "These are not the summaries you are looking for"


def test_capabilities_need_no_summary():
    invocation = parse_commandline(["-c"])
    assert invocation.capabilities is True
    assert invocation.summary is None


def test_body_escapes_are_decoded():
    invocation = parse_commandline(["sum", "line1\\nline2\\tend"])
    assert invocation.body == "line1\nline2\tend"


def test_options_are_collected():
    invocation = parse_commandline(
        ["-a", "app", "-u", "critical", "-t", "3000", "-i", "icon",
         "-h", "int:value:7", "-h", "broken", "-A", "yes,Yes", "-A", "bad",
         "-r", "12", "-p", "-b", "title", "text"]
    )
    assert invocation.appname == "app"
    assert invocation.urgency is Urgency.CRITICAL
    assert invocation.timeout == 3000
    assert invocation.icon == "icon"
    assert invocation.hints == [("int", "value", 7)]
    assert invocation.actions == [("yes", "Yes")]
    assert invocation.replace_id == 12
    assert invocation.printid is True
    assert invocation.block is True
    assert invocation.waits is True
    assert (invocation.summary, invocation.body) == ("title", "text")


def test_actions_alone_make_it_wait():
    assert parse_commandline(["s", "-A", "a,b"]).waits is True


@pytest.mark.parametrize("argv", [["-t", "abc", "s"], ["--unknown", "s"], ["-r"]])
def test_invalid_commandline(argv):
    with pytest.raises(UsageError):
        parse_commandline(argv)


def test_negative_timeout_accepted():
    assert parse_commandline(["-t", "0", "s"]).timeout == 0
    assert parse_commandline(["-t", "-1", "s"]).timeout == -1