"""Helpers for reading JavaScript string and template literal text."""

import re

# First "${" not escaped by a backslash
_INTERPOLATION_RE = re.compile(r"(?:^|[^\\])(?:\\\\)*\$\{")

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_LINE_CONTINUATIONS = {"\n", "\r", "\r\n", "\u2028", "\u2029"}

_ESCAPE_RE = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])"
)


def cook_escapes(raw: str) -> str:
    """Decode JavaScript escape sequences in string or template text."""

    def _replace(match: re.Match) -> str:
        escape = match.group(1)
        if escape in _LINE_CONTINUATIONS:
            return ""
        if escape in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[escape]
        if escape.startswith("u{"):
            code_point = int(escape[2:-1], 16)
            return chr(code_point) if code_point <= 0x10FFFF else escape
        if escape[0] in "ux" and len(escape) > 1:
            return chr(int(escape[1:], 16))
        return escape

    cooked = _ESCAPE_RE.sub(_replace, raw)
    # Rejoin surrogate pairs written as two \u escapes
    return cooked.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


def cook_template_head(raw: str) -> str:
    """Cook the text of a template literal up to its first interpolation.

    Interpolated content is dropped: the body of a literal reading
    ``adds ${n} items`` gives ``"adds "``.
    """
    match = _INTERPOLATION_RE.search(raw)
    head = raw[: match.end() - 2] if match else raw
    head = head.replace("\r\n", "\n").replace("\r", "\n")
    return cook_escapes(head)
