"""
Constant folding over the node tree.

The pass is bottom-up: children are optimized before their parent is
matched, so a left-associative chain such as 1 + 2 + 3 collapses one level
at a time into a single Number.
"""

from __future__ import annotations

import logging
import operator
from collections.abc import Callable

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

logger = logging.getLogger(__name__)

Numeric = int | float

FOLDABLE_BINOPS: dict[str, Callable[[Numeric, Numeric], Numeric]] = {
	"+": operator.add,
	"-": operator.sub,
	"*": operator.mul,
	"/": operator.truediv,
}


def fold(op: str, left: Numeric, right: Numeric) -> Numeric | None:
	"""Evaluate `left op right`, or None when it cannot be folded.

	Division always yields a float. Division by zero and results that do not
	fit in a float are left to the runtime.
	"""
	if op == "/" and right == 0:
		return None
	try:
		return FOLDABLE_BINOPS[op](left, right)
	except OverflowError:
		return None


def _optimize_all(nodes: tuple[Node, ...]) -> tuple[Node, ...]:
	return tuple(optimize(n) for n in nodes)


def _optimize_binary(node: Binary) -> Node:
	left = optimize(node.left)
	right = optimize(node.right)
	if isinstance(left, Number) and isinstance(right, Number):
		value = fold(node.op, left.value, right.value)
		if value is not None:
			logger.debug(
				"Folded %r %s %r -> %r", left.value, node.op, right.value, value
			)
			return Number(value)
	return Binary(node.op, left, right, node.meta)


def optimize(tree: Node) -> Node:
	"""Return a new tree with constant arithmetic folded.

	Total and pure: every node type is handled and the input is not changed.
	"""
	if isinstance(tree, Binary):
		return _optimize_binary(tree)

	if isinstance(tree, Boxed):
		# An empty shell around a literal is just the literal
		if tree.meta.is_empty():
			return Number(tree.value)
		return tree

	if isinstance(tree, (Number, Identifier, Nil)):
		return tree

	if isinstance(tree, Assign):
		return Assign(tree.target, optimize(tree.value), tree.meta)

	if isinstance(tree, Return):
		return Return(optimize(tree.value), tree.meta)

	if isinstance(tree, Sequence):
		return Sequence(_optimize_all(tree.elements))

	if isinstance(tree, Fn):
		return Fn(tree.params, _optimize_all(tree.body), tree.meta)

	if isinstance(tree, Def):
		return Def(
			tree.name,
			tree.params,
			_optimize_all(tree.body),
			private=tree.private,
			meta=tree.meta,
		)

	if isinstance(tree, Call):
		return Call(tree.path, tree.member, _optimize_all(tree.args), tree.meta)

	if isinstance(tree, Length):
		return Length(_optimize_all(tree.args), tree.meta)

	if isinstance(tree, Block):
		return Block(_optimize_all(tree.body))

	raise TypeError(f"Cannot optimize {type(tree).__name__}")
