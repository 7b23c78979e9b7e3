# Coalesced form: "/* note; other note */\n[from: a.tmpl, b.tmpl=2]"
from collections import Counter
from enum import Enum
import re

COMMENT_OPEN = "/*"
COMMENT_CLOSE = "*/"
SOURCE_OPEN = "[from: "
SOURCE_SEPARATOR = ", "
SOURCE_CLOSE = "]"

source_count_regex = re.compile(r"^(.*)=([0-9]+)$")


class CommentState(Enum):
    TEXT = 0
    COMMENT = 1
    SOURCE = 2


class TranslatorCommentParser:
    # step methods return how many following characters to skip

    def __init__(self, text: str):
        self.text = text
        self.state = CommentState.TEXT
        self.buffer = ""
        self.comments: list[str] = []
        self.sources: list[str] = []

    def parse(self) -> tuple[list[str], list[str]]:
        steps = {
            CommentState.TEXT: self.step_text,
            CommentState.COMMENT: self.step_comment,
            CommentState.SOURCE: self.step_source,
        }
        skip = 0
        for idx, this in enumerate(self.text):
            if skip > 0:
                skip -= 1
                continue
            if this == "\n":
                continue
            nxt = self.text[idx + 1] if idx + 1 < len(self.text) else ""
            skip = steps[self.state](idx, this, nxt)
        # an unterminated span is dropped
        return self.comments, self.sources

    def step_text(self, idx: int, this: str, nxt: str) -> int:
        if this + nxt == COMMENT_OPEN:
            self.state = CommentState.COMMENT
            return 1
        if this == "[" and self.text.startswith(SOURCE_OPEN, idx) and idx + len(SOURCE_OPEN) < len(self.text):
            self.state = CommentState.SOURCE
            return len(SOURCE_OPEN) - 1
        return 0

    def step_comment(self, idx: int, this: str, nxt: str) -> int:
        if this + nxt == COMMENT_CLOSE:
            self.comments.append(self.buffer.strip())
            self.buffer = ""
            self.state = CommentState.TEXT
            return 1
        self.buffer += this
        return 0

    def step_source(self, idx: int, this: str, nxt: str) -> int:
        if this + nxt == SOURCE_SEPARATOR:
            self.sources.append(self.buffer.strip())
            self.buffer = ""
            return 1
        if this == SOURCE_CLOSE:
            self.sources.append(self.buffer.strip())
            self.buffer = ""
            self.state = CommentState.TEXT
            return 0
        self.buffer += this
        return 0


def parse_comment(text: str) -> tuple[list[str], list[str]]:
    return TranslatorCommentParser(text).parse()


def unique(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


def count_sources(sources: list[str]) -> Counter:
    # "name=N" is a source already coalesced from N citations
    counts: Counter = Counter()
    for source in sources:
        match = source_count_regex.match(source)
        if match:
            counts[match.group(1)] += int(match.group(2))
        else:
            counts[source] += 1
    return counts


def coalesce(comments: list[str], sources: list[str]) -> str:
    coalesced = ""
    comment = "; ".join(unique([c for c in comments if c]))
    if comment:
        coalesced += f"{COMMENT_OPEN} {comment} {COMMENT_CLOSE}"

    counts = count_sources([s for s in sources if s])
    entries = []
    for name, count in counts.items():
        entries.append(f"{name}={count}" if count > 1 else name)
    source = SOURCE_SEPARATOR.join(entries)
    if source:
        if coalesced:
            coalesced += "\n"
        coalesced += f"{SOURCE_OPEN}{source}{SOURCE_CLOSE}"
    return coalesced


def coalesce_comment(text: str) -> str:
    if not text:
        return ""
    return coalesce(*parse_comment(text))
