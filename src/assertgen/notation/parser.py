# Copyright 2026 AssertGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for Java-like type notation.

Converts text such as ``java.util.Map<java.lang.String, ? extends Person[]>``
into a TypeShape. Grammar::

    type     := NAME arguments? ("[" "]")*
    arguments := "<" argument ("," argument)* ">"
    argument := "?" (("extends" | "super") type)? | type
"""

from __future__ import annotations

import re
from collections.abc import Collection
from dataclasses import dataclass
from typing import Any

from assertgen.model.types import ArrayShape, GenericShape, ScalarShape, TypeIdentity, VariableShape, WildcardShape

# ###############
# Public Interface
# ###############


class NotationError(Exception):
    """Raised when type notation text is syntactically invalid.

    Attributes:
        column: 1-based column of the offending character.
    """

    def __init__(self, message: str, column: int) -> None:
        super().__init__(f"Column {column}: {message}")
        self.column = column


def parse_type_shape(text: str, type_variables: Collection[str] = ()) -> Any:
    """Parse type notation into a TypeShape.

    Args:
        text: The type notation, e.g. ``java.util.List<com.acme.Person>``.
        type_variables: Names to treat as type variables rather than types.

    Returns:
        The parsed ScalarShape, ArrayShape, GenericShape, WildcardShape or
        VariableShape.

    Raises:
        NotationError: If the text is not valid type notation.
    """
    return _Parser(_tokenize(text), len(text), frozenset(type_variables)).parse()


# ################
# Implementation
# ################

_TOKEN_RE = re.compile(r"\s*(?:(?P<name>[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*)|(?P<symbol>[<>,?\[\]]))")


@dataclass(frozen=True)
class _Token:
    text: str
    column: int
    is_name: bool


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    pos = 0
    while pos < len(text):
        if text[pos:].strip() == "":
            break
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            column = pos + len(text[pos:]) - len(text[pos:].lstrip()) + 1
            raise NotationError(f"unexpected character {text[column - 1]!r}", column)
        kind = "name" if match.group("name") is not None else "symbol"
        tokens.append(_Token(match.group(kind), match.start(kind) + 1, kind == "name"))
        pos = match.end()
    return tokens


class _Parser:
    """Recursive-descent parser over a token list."""

    def __init__(self, tokens: list[_Token], length: int, type_variables: frozenset[str]) -> None:
        self._tokens = tokens
        self._pos = 0
        self._end_column = length + 1
        self._type_variables = type_variables

    def parse(self) -> Any:
        shape = self._parse_type()
        if self._pos < len(self._tokens):
            token = self._tokens[self._pos]
            raise NotationError(f"unexpected {token.text!r} after type", token.column)
        return shape

    def _parse_type(self) -> Any:
        token = self._next()
        if not token.is_name:
            raise NotationError(f"expected a type name, got {token.text!r}", token.column)

        if token.text in self._type_variables:
            if self._peek("<"):
                raise NotationError(f"type variable {token.text!r} cannot have type arguments", token.column)
            shape: Any = VariableShape(name=token.text)
        elif self._peek("<"):
            shape = GenericShape(base=TypeIdentity.named(token.text), arguments=tuple(self._parse_arguments()))
        else:
            shape = ScalarShape(type=TypeIdentity.named(token.text))

        while self._peek("["):
            self._next()
            self._expect("]")
            shape = ArrayShape(element=shape)
        return shape

    def _parse_arguments(self) -> list[Any]:
        self._expect("<")
        arguments = [self._parse_argument()]
        while self._peek(","):
            self._next()
            arguments.append(self._parse_argument())
        self._expect(">")
        return arguments

    def _parse_argument(self) -> Any:
        if not self._peek("?"):
            return self._parse_type()
        self._next()
        if self._peek("extends"):
            self._next()
            return WildcardShape(upper_bound=self._parse_type())
        if self._peek("super"):
            self._next()
            return WildcardShape(lower_bound=self._parse_type())
        return WildcardShape()

    def _peek(self, text: str) -> bool:
        return self._pos < len(self._tokens) and self._tokens[self._pos].text == text

    def _next(self) -> _Token:
        if self._pos >= len(self._tokens):
            raise NotationError("unexpected end of type", self._end_column)
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def _expect(self, text: str) -> None:
        token = self._next()
        if token.text != text:
            raise NotationError(f"expected {text!r}, got {token.text!r}", token.column)
