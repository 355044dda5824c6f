from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from .source_type import Resolver, SourceType, UnknownExtensionError


log = logging.getLogger(__name__)

SCRIPT_START = "<script"
SCRIPT_END = "</script>"
COMMENT_START = "<!--"
COMMENT_END = "-->"
DEFAULT_LANG = "mjs"


@dataclass(frozen=True)
class JavaScriptSource:
    source_text: str
    source_type: SourceType
    start: int  # UTF-8 byte offset of source_text in the document
    is_partial: bool = True

    @property
    def end(self) -> int:
        return self.start + len(self.source_text.encode("utf-8"))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_text": self.source_text,
            "source_type": self.source_type.to_dict(),
            "start": self.start,
            "end": self.end,
        }


def find_script_start(text: str, pos: int) -> Optional[int]:
    """Index of the next ``<script`` at or after ``pos`` outside any comment."""
    while True:
        index = text.find(SCRIPT_START, pos)
        if index == -1:
            return None
        comment_start = text.rfind(COMMENT_START, 0, index)
        if comment_start != -1:
            comment_end = text.find(COMMENT_END, comment_start)
            if comment_end > index:
                pos = comment_end + len(COMMENT_END)
                continue
        return index


def is_script_tag_name(text: str, pos: int) -> bool:
    # `pos` is just past "<script"; rejects look-alikes such as <script-view>
    if pos >= len(text):
        return False
    ch = text[pos]
    return ch == ">" or ch == " "


def find_script_closing_angle(text: str, pos: int) -> Optional[int]:
    """Index of the ``>`` ending the tag, skipping over quoted attribute values.

    Quotes are opaque spans with no escape handling.
    """
    quote: Optional[str] = None
    for index in range(pos, len(text)):
        ch = text[index]
        if quote is not None:
            if ch == quote:
                quote = None
        elif ch == ">":
            return index
        elif ch == '"' or ch == "'":
            quote = ch
    return None


def extract_lang_attribute(content: str) -> str:
    """Pull the ``lang`` value out of a raw tag interior.

    This is a substring search, so ``data-lang=...`` matches as well.
    Anything unexpected yields the default token.
    """
    content = content.strip()
    index = content.find("lang")
    if index == -1:
        return DEFAULT_LANG

    rest = content[index + len("lang") :].lstrip()
    if not rest.startswith("="):
        return DEFAULT_LANG
    rest = rest[1:].lstrip()
    if not rest:
        return DEFAULT_LANG

    first = rest[0]
    if first == '"' or first == "'":
        end = rest.find(first, 1)
        if end == -1:
            return DEFAULT_LANG
        return rest[1:end] or DEFAULT_LANG

    for i, ch in enumerate(rest):
        if ch.isspace() or ch == ">":
            return rest[:i] or DEFAULT_LANG
    return rest


class MpxPartialLoader:
    """Cuts the ``<script>`` blocks out of an MPX single-file component.

    MPX files may hold several script blocks, including JSON page config
    (``<script type="application/json">`` or ``<script name="json">``). Those
    are not special-cased: without a ``lang`` they come out as plain modules.
    """

    def __init__(self, source_text: str, resolver: Optional[Resolver] = None):
        self.source_text = source_text
        self.resolver: Resolver = resolver or SourceType.from_extension

    def parse(self) -> List[JavaScriptSource]:
        return list(self.iter_scripts())

    def iter_scripts(self) -> Iterator[JavaScriptSource]:
        text = self.source_text
        pointer = 0
        # char index -> UTF-8 byte offset, advanced along with the cursor
        ascii_only = text.isascii()
        seen_chars = 0
        seen_bytes = 0

        while True:
            index = find_script_start(text, pointer)
            if index is None:
                return
            pointer = index + len(SCRIPT_START)

            if not is_script_tag_name(text, pointer):
                log.debug("skipping look-alike tag at %d", index)
                continue

            closing = find_script_closing_angle(text, pointer)
            if closing is None:
                log.debug("unterminated <script tag at %d; stopping", index)
                return
            lang = extract_lang_attribute(text[pointer:closing])
            pointer = closing + 1

            source_type = self._resolve(lang)
            if source_type is None:
                log.debug("unknown script lang %r at %d; block dropped", lang, index)
                continue
            if "x" not in lang:
                source_type = source_type.with_standard(True)

            js_start = pointer
            js_end = text.find(SCRIPT_END, pointer)
            if js_end == -1:
                log.debug("no %s after tag at %d; stopping", SCRIPT_END, index)
                return
            pointer = js_end + len(SCRIPT_END)

            if ascii_only:
                start = js_start
            else:
                seen_bytes += len(text[seen_chars:js_start].encode("utf-8"))
                seen_chars = js_start
                start = seen_bytes

            yield JavaScriptSource(text[js_start:js_end], source_type, start)

    def _resolve(self, lang: str) -> Optional[SourceType]:
        try:
            return self.resolver(lang)
        except UnknownExtensionError:
            return None


def parse_mpx(
    source_text: str, resolver: Optional[Resolver] = None
) -> List[JavaScriptSource]:
    return MpxPartialLoader(source_text, resolver).parse()
