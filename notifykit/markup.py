"""Transformation and stripping of notification body markup."""

from __future__ import annotations

import enum
import logging

__all__ = ["MarkupMode", "markup_strip", "strip_a", "strip_img", "transform"]

_log = logging.getLogger(__name__)

_HEXDIGITS = "0123456789abcdefABCDEF"
_DIGITS = "0123456789"
_SUPPORTED_ENTITIES = ("&amp;", "&lt;", "&gt;", "&quot;", "&apos;")


class MarkupMode(enum.Enum):
    """How markup in a notification is handled."""

    NULL = 0
    NO = 1
    STRIP = 2
    FULL = 3


def _quote(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def _unquote(text: str) -> str:
    return (
        text.replace("&quot;", '"')
        .replace("&apos;", "'")
        .replace("&lt;", "<")
        .replace("&gt;", ">")
        .replace("&amp;", "&")
    )


def _br2nl(text: str) -> str:
    return text.replace("<br>", "\n").replace("<br/>", "\n").replace("<br />", "\n")


def _strip_delimited(text: str, opening: str, closing: str) -> str:
    kept = []
    depth = 0
    for char in text:
        if char == opening:
            depth += 1
        elif char == closing and depth > 0:
            depth -= 1
        elif depth == 0:
            kept.append(char)
    return "".join(kept)


def _append(urls: str | None, url: str) -> str:
    return url if urls is None else f"{urls}\n{url}"


def markup_strip(text: str) -> str:
    """Remove all tags and unquote the entities that remain."""
    return _unquote(_strip_delimited(text, "<", ">"))


def strip_a(text: str) -> tuple[str, str | None]:
    """Replace hyperlinks by their text.

    Returns the new text and the newline-joined ``[text] href`` entries,
    or ``None`` if no link carried an href.
    """
    urls: str | None = None
    while (tag1 := text.find("<a")) != -1:
        href = text.find('href="', tag1)
        tag1_end = text.find(">", tag1)
        tag2 = text.find("</a>", tag1)

        if tag1_end == -1:
            _log.warning("Given link is broken: '%s'", text[tag1:])
            text = text[:tag1]
            break
        if tag2 != -1 and tag2 < tag1_end:
            repl_len = tag2 - tag1 + len("</a>")
            _log.warning("Given link is broken: '%s.'", text[tag1:tag1 + repl_len])
            text = text[:tag1] + text[tag1 + repl_len:]
            break

        plain_url = None
        if href != -1 and href < tag1_end:
            value_start = href + len('href="')
            quote = text.find('"', value_start)
            if quote != -1 and quote < tag1_end:
                plain_url = text[value_start:quote]

        content_start = tag1_end + 1
        content_end = tag2 if tag2 != -1 else len(text)
        content = text[content_start:content_end]
        rest = content_end + len("</a>") if tag2 != -1 else content_end

        text = text[:tag1] + content + text[rest:]

        if plain_url is not None:
            label = content.replace("]", "").replace("[", "")
            urls = _append(urls, f"[{label}] {plain_url}")
    return text, urls


def strip_img(text: str) -> tuple[str, str | None]:
    """Replace image tags by their alt text, or ``[image]``.

    Returns the new text and the newline-joined ``[alt] src`` entries,
    or ``None`` if no image carried a usable src.
    """
    urls: str | None = None
    alt_prefix = 'alt="'
    src_prefix = 'src="'
    while (start := text.find("<img")) != -1:
        end = text.find(">", start)
        if end == -1:
            _log.warning("Given image is broken: '%s'", text[start:])
            text = text[:start]
            break

        alt_found = text.find(alt_prefix, start)
        src_found = text.find(src_prefix, start)

        alt_s = alt_e = src_s = src_e = None
        if alt_found != -1:
            alt_s = alt_found + len(alt_prefix)
            found = text.find('"', alt_s)
            alt_e = found if found != -1 else None
        if src_found != -1:
            src_s = src_found + len(src_prefix)
            found = text.find('"', src_s)
            src_e = found if found != -1 else None

        text_alt = None
        text_src = None

        if (
            alt_s is not None and alt_e is not None
            and src_s is not None and src_e is not None
            and (
                (alt_s < src_s and alt_e < src_s - len(src_prefix) and src_e < end)
                or (src_s < alt_s and src_e < alt_s - len(alt_prefix) and alt_e < end)
            )
        ):
            text_alt = text[alt_s:alt_e]
            text_src = text[src_s:src_e]
        elif (
            alt_s is not None and alt_e is not None and alt_e < end
            and (src_s is None or src_s < alt_s or alt_e < src_s - len(src_prefix))
        ):
            text_alt = text[alt_s:alt_e]
        elif (
            src_s is not None and src_e is not None and src_e < end
            and (alt_s is None or alt_s < src_s or src_e < alt_s - len(alt_prefix))
        ):
            text_src = text[src_s:src_e]
        else:
            _log.warning("Given image argument is broken: '%s'", text[start:end])

        if text_alt is None:
            text_alt = "[image]"

        text = text[:start] + text_alt + text[end + 1:]

        if text_src is not None:
            label = text_alt.replace("]", "").replace("[", "")
            urls = _append(urls, f"[{label}] {text_src}")
    return text, urls


def _is_entity(text: str, pos: int) -> bool:
    end = text.find(";", pos)
    if end == -1:
        return False
    if text[pos + 1] == "#":
        cur = pos + 2
        if text[cur] == "x":
            cur += 1
            if text[cur] == ";":
                return False
            while cur < end and text[cur] in _HEXDIGITS:
                cur += 1
        else:
            if text[cur] == ";":
                return False
            while cur < end and text[cur] in _DIGITS:
                cur += 1
        return cur == end
    return any(text.startswith(entity, pos) for entity in _SUPPORTED_ENTITIES)


def _escape_unsupported(text: str) -> str:
    pos = text.find("&")
    while pos != -1:
        if _is_entity(text, pos):
            pos = text.find("&", pos + 1)
        else:
            text = text[:pos] + "&amp;" + text[pos + 1:]
            pos = text.find("&", pos + len("&amp;"))
    return text


def transform(text: str, mode: MarkupMode, ignore_newline: bool = False) -> str:
    """Transform ``text`` according to ``mode`` and ``ignore_newline``."""
    if mode is MarkupMode.NULL:
        raise ValueError("markup mode must not be NULL")
    if mode is MarkupMode.NO:
        text = _quote(text)
    elif mode is MarkupMode.STRIP:
        text = _quote(markup_strip(_br2nl(text)))
    elif mode is MarkupMode.FULL:
        text = _br2nl(_escape_unsupported(text))
        text, _ = strip_a(text)
        text, _ = strip_img(text)
    else:
        raise ValueError(f"unknown markup mode: {mode!r}")

    if ignore_newline:
        text = text.replace("\n", " ")
    return text