"""
Source text -> canonical node tree.

The grammar lives in grammar.lark and is compiled once into an LALR parser.
Canonicalization happens in the tree transformer: function bodies get their
last statement wrapped in Return, `do ... end` blocks become plain statement
tuples, and no position information survives into the nodes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from lark import Lark, Token, Transformer, v_args
from lark.exceptions import (
	UnexpectedCharacters,
	UnexpectedEOF,
	UnexpectedInput,
	UnexpectedToken,
	VisitError,
)
from lark.lark import PostLex

from exjs.errors import Location, ParseError
from exjs.nodes import (
	NIL,
	Assign,
	Binary,
	Block,
	Call,
	Def,
	Fn,
	Identifier,
	Length,
	Node,
	Number,
	Return,
	Sequence,
)

logger = logging.getLogger(__name__)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")

# Words of the source language that can never name a variable, parameter or
# function, including those of constructs this compiler does not support.
RESERVED_WORDS: frozenset[str] = frozenset(
	{
		"after",
		"and",
		"case",
		"catch",
		"cond",
		"def",
		"defp",
		"do",
		"else",
		"end",
		"false",
		"fn",
		"if",
		"in",
		"nil",
		"not",
		"or",
		"receive",
		"rescue",
		"true",
		"try",
		"unless",
		"when",
		"with",
	}
)

_OPENERS = {"_LPAR", "_LSQB", "_LBRACE"}
_CLOSERS = {"_RPAR", "_RSQB", "_RBRACE"}
_BLOCK_OPENERS = {"_FN", "_DO"}
# A line break after one of these continues the current expression
_CONTINUATIONS = {
	"_PLUS",
	"_MINUS",
	"_STAR",
	"_SLASH",
	"_EQUAL",
	"_COMMA",
	"_ARROW",
	"_DO",
	"_DO_COLON",
}

_BRACKET = "bracket"
_BLOCK = "block"


class SeparatorFilter(PostLex):
	"""Post-lexer that drops statement separators that do not end a statement.

	Separators are meaningful directly inside `fn ... end` and `do ... end`
	blocks and at the top level. Inside (), [] and {} they are whitespace,
	and so is a separator that follows an operator, a comma, `->` or `do`.
	"""

	always_accept: tuple[str, ...] = ("_SEP",)

	def process(self, stream: Iterator[Token]) -> Iterator[Token]:
		nesting: list[str] = []
		previous: str | None = None
		for token in stream:
			kind = token.type
			if kind == "_SEP":
				if (nesting and nesting[-1] == _BRACKET) or previous in _CONTINUATIONS:
					continue
			elif kind in _OPENERS:
				nesting.append(_BRACKET)
			elif kind in _BLOCK_OPENERS:
				nesting.append(_BLOCK)
			elif (kind in _CLOSERS or kind == "_END") and nesting:
				nesting.pop()
			previous = kind
			yield token


def _name(token: Token) -> str:
	name = str(token)
	if name in RESERVED_WORDS:
		raise ParseError(
			f"Reserved word {name!r} cannot be used as a name",
			_token_location(token),
		)
	return name


def _token_location(token: Token) -> Location | None:
	if token.line is None or token.column is None:
		return None
	return Location(token.line, token.column)


def _alias_path(token: Token) -> tuple[str, ...]:
	return tuple(str(token).rstrip(".").split("."))


def _with_return(statements: list[Node] | tuple[Node, ...]) -> tuple[Node, ...]:
	"""Wrap the tail statement of a function body in Return."""
	if not statements:
		return (Return(NIL),)
	*init, last = statements
	return (*init, Return(last))


@v_args(inline=True)
class NodeBuilder(Transformer[Token, Node]):
	"""Turns the Lark parse tree into exjs nodes."""

	# --- Program and blocks --------------------------------------------------

	def start(self, *statements: Node) -> Node:
		if not statements:
			return NIL
		if len(statements) == 1:
			return statements[0]
		return Block(statements)

	def body(self, *statements: Node) -> tuple[Node, ...]:
		return _with_return(statements)

	# --- Statements ----------------------------------------------------------

	def assign(self, target: Token, value: Node) -> Assign:
		return Assign(Identifier(_name(target)), value)

	def _define(
		self,
		name: Token,
		params: tuple[Identifier, ...] | None,
		body: tuple[Node, ...] | None,
		private: bool,
	) -> Def:
		return Def(
			_name(name),
			params or (),
			body or _with_return(()),
			private=private,
		)

	def def_public(
		self,
		name: Token,
		params: tuple[Identifier, ...] | None,
		body: tuple[Node, ...] | None,
	) -> Def:
		return self._define(name, params, body, private=False)

	def def_private(
		self,
		name: Token,
		params: tuple[Identifier, ...] | None,
		body: tuple[Node, ...] | None,
	) -> Def:
		return self._define(name, params, body, private=True)

	def def_public_inline(
		self,
		name: Token,
		params: tuple[Identifier, ...] | None,
		stmt: Node,
	) -> Def:
		return self._define(name, params, _with_return((stmt,)), private=False)

	def def_private_inline(
		self,
		name: Token,
		params: tuple[Identifier, ...] | None,
		stmt: Node,
	) -> Def:
		return self._define(name, params, _with_return((stmt,)), private=True)

	def def_params(self, params: tuple[Identifier, ...] | None) -> tuple[Identifier, ...]:
		return params or ()

	def params(self, *names: Token) -> tuple[Identifier, ...]:
		return tuple(Identifier(_name(n)) for n in names)

	# --- Expressions ---------------------------------------------------------

	def add(self, left: Node, right: Node) -> Binary:
		return Binary("+", left, right)

	def sub(self, left: Node, right: Node) -> Binary:
		return Binary("-", left, right)

	def mul(self, left: Node, right: Node) -> Binary:
		return Binary("*", left, right)

	def div(self, left: Node, right: Node) -> Binary:
		return Binary("/", left, right)

	def integer(self, token: Token) -> Number:
		return Number(int(token))

	def float(self, token: Token) -> Number:
		return Number(float(token))

	def nil(self) -> Node:
		return NIL

	def identifier(self, token: Token) -> Identifier:
		return Identifier(_name(token))

	def sequence(self, elements: list[Node] | None) -> Sequence:
		return Sequence(tuple(elements or ()))

	def args(self, *elements: Node) -> list[Node]:
		return list(elements)

	def qualified_name(self, path: Token, member: Token) -> tuple[tuple[str, ...], str]:
		return _alias_path(path), str(member)

	def call(self, *children) -> Call:
		if len(children) == 1:
			# Bare `Alias.member` without arguments
			path, member = children[0]
			return Call(path, member)
		path_token, callee, args = children
		return Call(_alias_path(path_token), str(callee), tuple(args or ()))

	def bare_call(self, head: tuple[tuple[str, ...], str], arg: Node) -> Call:
		path, member = head
		return Call(path, member, (arg,))

	def length(self, arg: Node) -> Length:
		return Length((arg,))

	def length_call(self, _keyword: Token, args: list[Node]) -> Length:
		return Length(tuple(args))

	def fn(
		self, params: tuple[Identifier, ...] | None, body: tuple[Node, ...] | None
	) -> Fn:
		return Fn(params or (), body or _with_return(()))

	def fn_params(self, params: tuple[Identifier, ...] | None) -> tuple[Identifier, ...]:
		return params or ()


_parser: Lark | None = None


def _get_parser() -> Lark:
	"""Build the LALR parser on first use."""
	global _parser
	if _parser is None:
		_parser = Lark(
			_GRAMMAR_PATH.read_text(encoding="utf-8"),
			parser="lalr",
			lexer="contextual",
			postlex=SeparatorFilter(),
			maybe_placeholders=True,
		)
	return _parser


def _end_location(source: str) -> Location:
	lines = source.split("\n")
	return Location(len(lines), len(lines[-1]) + 1)


def _describe(exc: UnexpectedInput, source: str) -> ParseError:
	if isinstance(exc, UnexpectedCharacters):
		char = source[exc.pos_in_stream] if exc.pos_in_stream < len(source) else ""
		return ParseError(
			f"Unexpected character {char!r}",
			Location(exc.line, exc.column),
			exc.get_context(source),
		)
	if isinstance(exc, UnexpectedToken):
		token = exc.token
		if token.type == "$END":
			return ParseError("Unexpected end of input", _end_location(source))
		what = "line break" if token.type == "_SEP" else repr(str(token))
		return ParseError(
			f"Unexpected {what}",
			_token_location(token),
			exc.get_context(source),
		)
	if isinstance(exc, UnexpectedEOF):
		return ParseError("Unexpected end of input", _end_location(source))
	return ParseError(str(exc))


def parse(source: str) -> Node:
	"""Parse source text into a canonical node tree.

	Raises ParseError (a SyntaxError) when the text is outside the supported
	grammar. Empty input and `()` parse to Nil.
	"""
	try:
		tree = _get_parser().parse(source)
	except UnexpectedInput as exc:
		logger.debug("Parse failed: %s", exc)
		raise _describe(exc, source) from exc
	try:
		return NodeBuilder().transform(tree)
	except VisitError as exc:
		if isinstance(exc.orig_exc, ParseError):
			raise exc.orig_exc from None
		raise
