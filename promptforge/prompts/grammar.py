"""Template grammar: tokenizer, recursive-descent parser and renderer.

The grammar understands four tags; everything else is literal text::

    {{name}}                              variable interpolation
    {{#if name}} ... {{/if}}              conditional block
    {{#if name.includes 'value'}} ... {{/if}}
                                          array-membership block
    {{/if}}                               closes the innermost open block

Blocks nest and are replaced by their body or by nothing; the text around
the tags, newlines included, is kept as written.
Rendering never re-scans substituted values, so a value containing
``{{...}}`` is emitted verbatim.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Iterable, Union

from .errors import TemplateSyntaxError

_TAG_RE = re.compile(
    r"\{\{(?:"
    r"#if\s+(?P<cond>\w+)(?:\.includes\s+'(?P<value>[^']+)')?\s*"
    r"|(?P<close>/if)"
    r"|(?P<var>\w+)"
    r")\}\}"
)


# ---------------------------------------------------------------------------
# Tokens and nodes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Token:
    kind: str  # "text" | "var" | "open" | "close"
    text: str
    position: int
    name: str = ""
    value: str | None = None


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Variable:
    name: str
    raw: str


@dataclass(frozen=True)
class Conditional:
    """A ``{{#if}}`` block; ``value`` is set for ``.includes`` blocks."""
    name: str
    value: str | None
    body: tuple["Node", ...]


Node = Union[Text, Variable, Conditional]


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

def tokenize(content: str) -> list[Token]:
    """Split *content* into text runs and tags, in source order."""
    tokens: list[Token] = []
    cursor = 0
    for match in _TAG_RE.finditer(content):
        start = match.start()
        if start > cursor:
            tokens.append(Token("text", content[cursor:start], cursor))
        if match.group("cond"):
            tokens.append(
                Token("open", match.group(0), start,
                      name=match.group("cond"), value=match.group("value"))
            )
        elif match.group("close"):
            tokens.append(Token("close", match.group(0), start))
        else:
            tokens.append(Token("var", match.group(0), start, name=match.group("var")))
        cursor = match.end()
    if cursor < len(content):
        tokens.append(Token("text", content[cursor:], cursor))
    return tokens


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class _Parser:
    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.index = 0

    def parse(self) -> tuple[Node, ...]:
        nodes = self._block(opener=None)
        return tuple(nodes)

    def _block(self, opener: Token | None) -> list[Node]:
        nodes: list[Node] = []
        while self.index < len(self.tokens):
            token = self.tokens[self.index]
            self.index += 1
            if token.kind == "text":
                nodes.append(Text(token.text))
            elif token.kind == "var":
                nodes.append(Variable(token.name, token.text))
            elif token.kind == "open":
                body = self._block(opener=token)
                nodes.append(Conditional(token.name, token.value, tuple(body)))
            else:
                if opener is None:
                    raise TemplateSyntaxError("Unexpected {{/if}} without a matching {{#if}}", token.position)
                return nodes
        if opener is not None:
            raise TemplateSyntaxError(f"Unclosed block {opener.text}", opener.position)
        return nodes


@lru_cache(maxsize=256)
def parse(content: str) -> tuple[Node, ...]:
    """Parse template *content* into a node tree.

    Raises:
        TemplateSyntaxError: On an unclosed ``{{#if}}`` or a stray ``{{/if}}``.
    """
    return _Parser(tokenize(content)).parse()


def check_syntax(content: str) -> None:
    """Raise ``TemplateSyntaxError`` if *content* is not well-formed."""
    parse(content)


def referenced_names(content: str) -> list[str]:
    """Names used by variables and conditions, in first-use order."""
    names: dict[str, None] = {}

    def walk(nodes: Iterable[Node]) -> None:
        for node in nodes:
            if isinstance(node, Variable):
                names.setdefault(node.name)
            elif isinstance(node, Conditional):
                names.setdefault(node.name)
                walk(node.body)

    walk(parse(content))
    return list(names)


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------

def stringify(value: Any) -> str:
    """String form of an interpolated value.

    Matches what catalog templates were written against: lists join with a
    bare comma and whole floats drop their fractional part.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


def _condition_holds(node: Conditional, data: dict[str, Any]) -> bool:
    current = data.get(node.name)
    if node.value is not None:
        return isinstance(current, (list, tuple, set, frozenset)) and node.value in current
    return bool(current)


def _render_nodes(nodes: Iterable[Node], data: dict[str, Any], out: list[str]) -> None:
    for node in nodes:
        if isinstance(node, Text):
            out.append(node.value)
        elif isinstance(node, Variable):
            value = data.get(node.name)
            # Unresolved placeholders stay in the output untouched.
            out.append(node.raw if value is None else stringify(value))
        elif _condition_holds(node, data):
            _render_nodes(node.body, data, out)


def render(content: str, data: dict[str, Any]) -> str:
    """Render template *content* against *data*.

    Raises:
        TemplateSyntaxError: If *content* is not well-formed.
    """
    out: list[str] = []
    _render_nodes(parse(content), data, out)
    return "".join(out)
