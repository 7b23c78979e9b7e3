"""Removal of translator comment annotations from template actions."""

COMMAND_OPEN, COMMAND_CLOSE = "{{", "}}"
INLINE_OPEN, INLINE_CLOSE = "(", ")"


def carve(text: str, open: str, close: str) -> tuple[str, str, str, bool]:
    """Return (prefix, interior, suffix, found) for the first balanced region."""
    start = text.find(open)
    if start < 0:
        return text, "", "", False

    depth = 1
    pos = start + len(open)
    while pos < len(text):
        if text.startswith(close, pos):
            depth -= 1
            if depth == 0:
                return text[:start], text[start + len(open):pos], text[pos + len(close):], True
            pos += len(close)
        elif text.startswith(open, pos):
            depth += 1
            pos += len(open)
        else:
            pos += 1
    return text, "", "", False


def starts_with_underscore(value: str) -> bool:
    return value.strip().startswith("_ ")


def ends_with_close_comment(value: str) -> bool:
    return value.strip().endswith("*/")


def prune_annotation(interior: str) -> str:
    start_dash = end_dash = ""
    if interior.startswith("-"):
        start_dash, interior = "-", interior[1:]
    if interior.endswith("-"):
        end_dash, interior = "-", interior[:-1]

    if starts_with_underscore(interior) and ends_with_close_comment(interior):
        idx = interior.find("/*")
        if idx >= 0:
            interior = interior[:idx]
            if interior.strip() == "_":
                # nothing but the marker is left
                interior = " "
    return start_dash + interior + end_dash


def _prune_regions(text: str, open: str, close: str, nested: bool = False) -> str:
    parts = []
    remainder = text
    while True:
        before, middle, after, found = carve(remainder, open, close)
        if not found:
            parts.append(remainder)
            break
        pruned = prune_annotation(middle)
        if nested and pruned == middle:
            pruned = _prune_regions(middle, open, close, nested=True)
        parts.append(before + open + pruned + close)
        remainder = after
    return "".join(parts)


def prune_command_comments(text: str) -> str:
    return _prune_regions(text, COMMAND_OPEN, COMMAND_CLOSE)


def prune_inline_comments(text: str) -> str:
    parts = []
    remainder = text
    while True:
        before, middle, after, found = carve(remainder, COMMAND_OPEN, COMMAND_CLOSE)
        if not found:
            parts.append(remainder)
            break
        middle = _prune_regions(middle, INLINE_OPEN, INLINE_CLOSE, nested=True)
        parts.append(before + COMMAND_OPEN + middle + COMMAND_CLOSE)
        remainder = after
    return "".join(parts)


def prune_all_comments(text: str) -> str:
    return prune_command_comments(prune_inline_comments(text))
