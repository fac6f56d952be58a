"""
Node tree -> minified JavaScript.

Emission writes into a shared list[str] buffer that is joined once at the
end. Output never contains insignificant whitespace. Parentheses are only
written where the JavaScript reading of the text would otherwise differ from
the tree shape.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from exjs.nodes import (
	Assign,
	Binary,
	Block,
	Boxed,
	Call,
	Def,
	Fn,
	Identifier,
	Length,
	Nil,
	Node,
	Number,
	Return,
	Sequence,
)

# Alias segments with a JavaScript global of a different spelling
ALIASES: dict[str, str] = {
	"Window": "window",
	"Console": "console",
}

# Operator precedence (higher = binds tighter)
_PRIMARY = 20
_PRECEDENCE: dict[str, int] = {
	"*": 15,
	"/": 15,
	"+": 14,
	"-": 14,
	"=": 2,
}


def generate(tree: Node) -> str:
	"""Emit a node tree as minified JavaScript."""
	out: list[str] = []
	_emit(tree, out)
	return "".join(out)


def format_number(value: int | float) -> str:
	"""JavaScript text for a numeric literal.

	Floats keep their decimal point: 2.0 stays "2.0" and 1e16 becomes "1.0e16".
	"""
	if isinstance(value, float):
		if math.isnan(value):
			return "NaN"
		if math.isinf(value):
			return "Infinity" if value > 0 else "-Infinity"
		text = repr(value)
		mantissa, e, exponent = text.partition("e")
		if e:
			# 1e+16 -> 1.0e16
			if "." not in mantissa:
				mantissa += ".0"
			return f"{mantissa}e{int(exponent)}"
		return text
	return str(value)


def _precedence(node: Node) -> int:
	if isinstance(node, Binary):
		return _PRECEDENCE[node.op]
	if isinstance(node, Assign):
		return _PRECEDENCE["="]
	return _PRIMARY


def _is_negative(node: Node) -> bool:
	return isinstance(node, (Number, Boxed)) and node.value < 0


def _emit_paren(node: Node, out: list[str]) -> None:
	out.append("(")
	_emit(node, out)
	out.append(")")


def _emit_operand(node: Node, parent_op: str, side: str, out: list[str]) -> None:
	"""Emit an operand of a binary operator, parenthesized if needed."""
	child_prec = _precedence(node)
	parent_prec = _PRECEDENCE[parent_op]
	needs_parens = child_prec < parent_prec or (
		# Left associative: a - (b - c) keeps its parens
		child_prec == parent_prec and side == "right"
	)
	if side == "right" and _is_negative(node):
		needs_parens = True
	if needs_parens:
		_emit_paren(node, out)
	else:
		_emit(node, out)


def _emit_receiver(node: Node, out: list[str]) -> None:
	"""Emit the object of a member access: obj.length"""
	# 2.length is not valid JavaScript
	if _precedence(node) < _PRIMARY or isinstance(node, (Number, Boxed, Fn)):
		_emit_paren(node, out)
	else:
		_emit(node, out)


def _emit_joined(nodes: Iterable[Node], sep: str, out: list[str]) -> None:
	for i, node in enumerate(nodes):
		if i > 0:
			out.append(sep)
		_emit(node, out)


def _emit_function(
	params: Iterable[Identifier], body: Iterable[Node], out: list[str]
) -> None:
	"""Emit `(p1,p2){s1;s2}`, the part shared by every function form."""
	out.append("(")
	_emit_joined(params, ",", out)
	out.append("){")
	_emit_joined(body, ";", out)
	out.append("}")


def _emit(node: Node, out: list[str]) -> None:
	if isinstance(node, Nil):
		out.append("null")
		return

	if isinstance(node, Identifier):
		out.append(node.name)
		return

	if isinstance(node, (Number, Boxed)):
		out.append(format_number(node.value))
		return

	if isinstance(node, Binary):
		_emit_operand(node.left, node.op, "left", out)
		out.append(node.op)
		_emit_operand(node.right, node.op, "right", out)
		return

	if isinstance(node, Assign):
		_emit(node.target, out)
		out.append("=")
		_emit(node.value, out)
		return

	if isinstance(node, Sequence):
		out.append("[")
		_emit_joined(node.elements, ",", out)
		out.append("]")
		return

	if isinstance(node, Return):
		out.append("return ")
		_emit(node.value, out)
		return

	if isinstance(node, Length):
		# Only the first argument counts
		_emit_receiver(node.args[0], out)
		out.append(".length")
		return

	if isinstance(node, Call):
		out.append(".".join(ALIASES.get(segment, segment) for segment in node.path))
		out.append(".")
		out.append(node.member)
		out.append("(")
		_emit_joined(node.args, ",", out)
		out.append(")")
		return

	if isinstance(node, Fn):
		out.append("function")
		_emit_function(node.params, node.body, out)
		return

	if isinstance(node, Def):
		if node.private:
			out.append("function ")
			out.append(node.name)
		else:
			out.append("this.")
			out.append(node.name)
			out.append("=function")
		_emit_function(node.params, node.body, out)
		return

	if isinstance(node, Block):
		_emit_joined(node.body, ";", out)
		return

	raise TypeError(f"Cannot generate JavaScript for {type(node).__name__}")
