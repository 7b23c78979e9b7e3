#!/usr/bin/python3
# Copyright (c) 2026 The tmpltranslate Authors
import json
import logging
import pathlib

from tmpltranslate.classes import Catalog, Message, ParseState, Placeholder, Translation
from tmpltranslate.fmtverbs import DecomposeError, decompose
from tmpltranslate.scanner import Scanner, TokenKind, is_quoted, is_variable_rune, trim_quotes
from tmpltranslate.translator import SOURCE_CLOSE, SOURCE_OPEN, SOURCE_SEPARATOR, coalesce_comment

logger = logging.getLogger(__name__)

# blanks are kept as tokens while isolating statements
STATEMENT_WHITESPACE = "\r"
ACTION_OPEN = "{{"
MESSAGE_PREFIX = "_ "
DEFAULT_PATTERNS = ("*.tmpl",)


def trim_statement(value: str) -> str:
    value = value.strip()
    if value.startswith("-"):
        value = value[1:]
    if value.endswith("-"):
        value = value[:-1]
    return value.strip()


def parse_sub_statements(statement: str) -> list[str]:
    found: list[str] = []
    # one [slot, buffer] entry per open region, innermost last
    stack: list[list] = []
    for token in Scanner(statement, whitespace=STATEMENT_WHITESPACE):
        value = token.text
        if value == "(":
            found.append("")
            stack.append([len(found) - 1, ""])
            continue
        if value == ")":
            if not stack:
                continue
            slot, buffer = stack.pop()
            found[slot] = buffer.strip()
            if stack:
                stack[-1][1] += "(" + buffer + ")"
            continue
        if stack:
            stack[-1][1] += value

    for slot, buffer in stack:
        found[slot] = buffer.strip()
    return [value for value in found if value]


def scan_action(text: str, start: int) -> tuple[str, int] | None:
    # Lexes from just after "{{" up to the matching "}}"; None when it never closes
    current = ""
    found_close = False
    for token in Scanner(text[start:], whitespace=STATEMENT_WHITESPACE):
        value = token.text
        if value == "}":
            if found_close:
                return current, start + token.pos + 1
            found_close = True
            continue
        found_close = False
        if value != "{":
            current += value
    return None


def parse_statements(text: str) -> list[str]:
    """Return the contents of every ``{{ ... }}`` action in text.

    Each action is followed by its parenthesized sub-statements. Markup
    outside actions is not lexed.
    """
    statements = []
    pos = 0
    while True:
        start = text.find(ACTION_OPEN, pos)
        if start < 0:
            break
        action = scan_action(text, start + len(ACTION_OPEN))
        if action is None:
            break
        current, pos = action
        statements.append(trim_statement(current))
        statements.extend(parse_sub_statements(current))
    return statements


def prune_template_messages(text: str) -> list[str]:
    pruned = []
    for statement in parse_statements(text):
        if not statement.startswith(MESSAGE_PREFIX):
            continue
        statement = statement[len(MESSAGE_PREFIX):]
        depth = 0
        for token in Scanner(statement):
            if token.kind is not TokenKind.PUNCT:
                continue
            if token.text == "(":
                depth += 1
            elif token.text == ")":
                depth = max(depth - 1, 0)
            elif token.text == "|" and depth == 0:
                statement = statement[: token.pos].strip()
                break
        pruned.append(statement)
    return pruned


def parse_message_state(statement: str, source: str | None = None) -> ParseState | None:
    state = ParseState(source=source)
    # a parenthesized argument is kept whole
    depth = group_start = 0
    for token in Scanner(statement, ident_rune=is_variable_rune):
        value = token.text
        if not state.format:
            if len(value) > 2:
                if not is_quoted(value):
                    logger.debug(f"Skipping dynamic message: {statement}")
                    return None
                state.format = trim_quotes(value)
        elif value == "(":
            if depth == 0:
                group_start = token.pos
            depth += 1
        elif depth > 0:
            if value == ")":
                depth -= 1
                if depth == 0:
                    state.argv.append(statement[group_start : token.pos + 1])
        elif value.startswith("/*"):
            if state.comment:
                state.comment += "\n"
            state.comment += value
        elif is_quoted(value):
            state.argv.append(trim_quotes(value))
        elif state.argv and state.argv[-1] in ("$", "."):
            state.argv[-1] += value
        else:
            state.argv.append(value)

    if depth > 0:
        state.argv.append(statement[group_start:].strip())
    if not state.format:
        return None
    return state


def parse_message_states(statements: list[str], source: str | None = None) -> list[ParseState]:
    states = []
    for statement in statements:
        state = parse_message_state(statement, source)
        if state is not None:
            states.append(state)
    return states


def group_message_states(states: list[ParseState]) -> dict[str, list[ParseState]]:
    unique: dict[str, list[ParseState]] = {}
    for state in states:
        unique.setdefault(state.format, []).append(state)
    return unique


def merge_comments(items: list[ParseState]) -> str:
    # a comment repeated by any other call site is left out
    comment = items[0].comment
    for idx, item in enumerate(items):
        if idx == 0 or not item.comment:
            continue
        dupe = any(jdx != idx and other.comment == item.comment for jdx, other in enumerate(items))
        if not dupe:
            if comment:
                comment += "\n"
            comment += item.comment

    sources = [item.source for item in items if item.source]
    if sources:
        if comment:
            comment += "\n"
        comment += SOURCE_OPEN + SOURCE_SEPARATOR.join(sources) + SOURCE_CLOSE
    return comment


def parse_placeholders(format: str, *argv: str) -> tuple[str, str, list[Placeholder]]:
    replaced, labelled, variables = decompose(format, *argv)
    placeholders = [
        Placeholder(
            id=variable.label,
            string=variable.string,
            type=variable.type,
            underlying_type=variable.type,
            arg_num=variable.pos,
        )
        for variable in variables
    ]
    return replaced, labelled, placeholders


def build_message(format: str, comment: str, *argv: str) -> Message:
    replaced, labelled, placeholders = parse_placeholders(format, *argv)
    return Message(
        id=labelled,
        key=format,
        message=replaced,
        translation=Translation(replaced),
        translator_comment=coalesce_comment(comment),
        placeholders=placeholders,
        fuzzy=True,
    )


def bind_placeholders(message: Message, items: list[ParseState]) -> None:
    for placeholder in message.placeholders:
        index = placeholder.arg_num - 1
        bindings: list[str] = []
        for item in items:
            if index < len(item.argv) and item.argv[index] not in bindings:
                bindings.append(item.argv[index])
        if bindings:
            placeholder.expr = ", ".join(bindings)


def assemble_messages(states: list[ParseState]) -> list[Message]:
    messages = []
    for key, items in group_message_states(states).items():
        seed = items[0]
        try:
            message = build_message(key, merge_comments(items), *seed.argv)
        except DecomposeError as ex:
            logger.warning(f"Skipping message {key!r}: {ex}")
            continue
        bind_placeholders(message, items)
        messages.append(message)
    return messages


def parse_template_states(text: str, source: str | None = None) -> list[ParseState]:
    return parse_message_states(prune_template_messages(text), source)


def extract_messages(text: str, source: str | None = None) -> list[Message]:
    return assemble_messages(parse_template_states(text, source))


def extract_file(path: str, source: str | None = None) -> list[Message]:
    return extract_messages(pathlib.Path(path).read_text("utf-8"), source)


def extract_folder(path: str, patterns=DEFAULT_PATTERNS) -> list[Message]:
    root = pathlib.Path(path)
    files = {file for pattern in patterns for file in root.rglob(pattern) if file.is_file()}
    states: list[ParseState] = []
    for file in sorted(files, key=lambda f: f.relative_to(root).as_posix()):
        source = file.relative_to(root).as_posix()
        logger.debug(f"Parsing {source}")
        try:
            text = file.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as ex:
            logger.error(f"Error reading {source}: {ex}")
            continue
        states.extend(parse_template_states(text, source))
    return assemble_messages(states)


def run(
    *,
    template_folder_path: str,
    output_path: str | None,
    language: str,
    patterns=DEFAULT_PATTERNS,
) -> Catalog:
    logger.info(f"Scanning {template_folder_path}...")
    catalog = Catalog(language, extract_folder(template_folder_path, patterns))
    logger.info(f"Extracted {len(catalog.messages)} messages")

    data = json.dumps(catalog.to_dict(), indent=2, ensure_ascii=False) + "\n"
    if output_path:
        output = pathlib.Path(output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(data, "utf-8")
        logger.info(f"Wrote {output}")
    else:
        print(data, end="")
    return catalog
