from dataclasses import dataclass
import re

VERB_RE = re.compile(
    r"%(?P<flags>[-+# 0]*)"
    r"(?:\[(?P<width_index>[^\]]*)\])?(?P<width>\*|[0-9]+)?"
    r"(?:\.(?:\[(?P<precision_index>[^\]]*)\])?(?P<precision>\*|[0-9]+)?)?"
    r"(?:\[(?P<index>[^\]]*)\])?"
    r"(?P<verb>.)?",
    re.DOTALL,
)
WORD_RE = re.compile(r"[^\W_]+")

VERB_TYPES = {
    "v": "any",
    "T": "any",
    "p": "any",
    "t": "bool",
    "b": "int",
    "c": "int",
    "d": "int",
    "o": "int",
    "O": "int",
    "U": "int",
    "x": "int",
    "X": "int",
    "e": "float",
    "E": "float",
    "f": "float",
    "F": "float",
    "g": "float",
    "G": "float",
    "s": "string",
    "q": "string",
}


class DecomposeError(ValueError):
    pass


@dataclass
class Variable:
    label: str
    pos: int
    type: str
    string: str


def make_label(expr: str, pos: int) -> str:
    label = "".join(word[0].upper() + word[1:] for word in WORD_RE.findall(expr))
    if not label or label[0].isdecimal():
        return f"Arg{pos}"
    return label


def parse_index(value: str, format: str) -> int:
    if not value.isdecimal() or int(value) < 1:
        raise DecomposeError(f"bad argument index [{value}] in {format!r}")
    return int(value)


def decompose(format: str, *argv: str) -> tuple[str, str, list[Variable]]:
    replaced = labelled = ""
    variables: list[Variable] = []
    labels: dict[int, str] = {}
    arg = 1

    def label_for(pos: int) -> str:
        if pos not in labels:
            label = make_label(argv[pos - 1], pos) if pos <= len(argv) else f"Arg{pos}"
            if label in labels.values():
                label = f"{label}_{pos}"
            labels[pos] = label
        return labels[pos]

    pos = 0
    while pos < len(format):
        idx = format.find("%", pos)
        if idx < 0:
            replaced += format[pos:]
            labelled += format[pos:]
            break
        replaced += format[pos:idx]
        labelled += format[pos:idx]

        if format.startswith("%%", idx):
            replaced += "%"
            labelled += "%%"
            pos = idx + 2
            continue

        match = VERB_RE.match(format, idx)
        verb = match.group("verb")
        if verb is None:
            raise DecomposeError(f"missing verb at end of {format!r}")
        if verb not in VERB_TYPES:
            raise DecomposeError(f"unknown verb %{verb} in {format!r}")

        if match.group("width_index") is not None:
            arg = parse_index(match.group("width_index"), format)
        if match.group("width") == "*":
            arg += 1
        if match.group("precision_index") is not None:
            arg = parse_index(match.group("precision_index"), format)
        if match.group("precision") == "*":
            arg += 1
        if match.group("index") is not None:
            arg = parse_index(match.group("index"), format)

        token = match.group(0)
        label = label_for(arg)
        variables.append(Variable(label, arg, VERB_TYPES[verb], token))
        replaced += "{" + label + "}"
        labelled += "{" + label + ":" + token + "}"
        arg += 1
        pos = match.end()

    return replaced, labelled, variables
