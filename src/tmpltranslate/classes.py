from dataclasses import dataclass, field


@dataclass
class Placeholder:
    id: str
    string: str
    type: str
    underlying_type: str
    arg_num: int
    expr: str = "-"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "string": self.string,
            "type": self.type,
            "underlyingType": self.underlying_type,
            "argNum": self.arg_num,
            "expr": self.expr,
        }


@dataclass
class Translation:
    string: str


@dataclass
class Message:
    id: str
    key: str
    message: str
    translation: Translation
    translator_comment: str = ""
    placeholders: list[Placeholder] = field(default_factory=list)
    fuzzy: bool = True

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "key": self.key,
            "message": self.message,
            "translation": self.translation.string,
        }
        if self.translator_comment:
            data["translatorComment"] = self.translator_comment
        if self.placeholders:
            data["placeholders"] = [p.to_dict() for p in self.placeholders]
        data["fuzzy"] = self.fuzzy
        return data


@dataclass
class Catalog:
    language: str
    messages: list[Message]

    def to_dict(self) -> dict:
        return {
            "language": self.language,
            "messages": [m.to_dict() for m in self.messages],
        }


@dataclass
class ParseState:
    format: str = ""
    argv: list[str] = field(default_factory=list)
    comment: str = ""
    source: str | None = None
