"""
Tests for constant folding.
"""

from functools import reduce

import pytest
from exjs.nodes import (
	NIL,
	Assign,
	Binary,
	Block,
	Boxed,
	Call,
	Def,
	Fn,
	Identifier,
	Length,
	Meta,
	Node,
	Number,
	Return,
	Sequence,
)
from exjs.optimizer import fold, optimize

x = Identifier("x")


def chain(op: str, values: list[int]) -> Node:
	"""Left-associative chain: ((v0 op v1) op v2) ..."""
	node: Node = Number(values[0])
	for v in values[1:]:
		node = Binary(op, node, Number(v))  # pyright: ignore[reportArgumentType]
	return node


# =============================================================================
# Folding
# =============================================================================


class TestFolding:
	"""Test arithmetic on literal operands."""

	def test_add(self):
		assert optimize(Binary("+", Number(2), Number(2))) == Number(4)

	def test_mul(self):
		assert optimize(Binary("*", Number(2), Number(2))) == Number(4)

	def test_sub(self):
		assert optimize(Binary("-", Number(4), Number(2))) == Number(2)

	def test_sub_can_go_negative(self):
		assert optimize(Binary("-", Number(2), Number(5))) == Number(-3)

	def test_integer_ops_stay_integer(self):
		for op in ("+", "-", "*"):
			result = optimize(Binary(op, Number(6), Number(3)))  # pyright: ignore[reportArgumentType]
			assert isinstance(result, Number)
			assert type(result.value) is int

	def test_division_is_always_float(self):
		result = optimize(Binary("/", Number(4), Number(2)))
		assert result == Number(2.0)
		assert result != Number(2)

	def test_division_with_remainder(self):
		assert optimize(Binary("/", Number(5), Number(2))) == Number(2.5)

	def test_float_operand_gives_float(self):
		assert optimize(Binary("+", Number(1), Number(2.0))) == Number(3.0)
		assert optimize(Binary("*", Number(1.5), Number(2))) == Number(3.0)

	def test_division_by_zero_is_not_folded(self):
		node = Binary("/", Number(1), Number(0))
		assert optimize(node) == node

	def test_division_by_float_zero_is_not_folded(self):
		node = Binary("/", Number(1), Number(0.0))
		assert optimize(node) == node

	def test_float_overflow_is_not_folded(self):
		node = Binary("/", Number(10**400), Number(3))
		assert optimize(node) == node

	def test_fold_helper(self):
		assert fold("+", 1, 2) == 3
		assert fold("/", 4, 2) == 2.0
		assert fold("/", 4, 0) is None


# =============================================================================
# Chains
# =============================================================================


class TestChains:
	"""Long left-associative chains fold completely."""

	def test_sum_chain(self):
		assert optimize(chain("+", list(range(1, 9)))) == Number(36)

	def test_product_chain(self):
		assert optimize(chain("*", list(range(1, 9)))) == Number(40320)

	@pytest.mark.parametrize("n", [2, 5, 50, 200])
	def test_any_depth(self, n: int):
		values = list(range(1, n + 1))
		assert optimize(chain("+", values)) == Number(sum(values))

	def test_product_any_depth(self):
		values = [2] * 30
		assert optimize(chain("*", values)) == Number(reduce(lambda a, b: a * b, values))

	def test_nested_both_sides(self):
		node = Binary(
			"*",
			Binary("+", Number(1), Number(2)),
			Binary("-", Number(10), Number(4)),
		)
		assert optimize(node) == Number(18)


# =============================================================================
# Non-constant operands
# =============================================================================


class TestPartialFolding:
	"""Nodes with identifiers keep their shape."""

	@pytest.mark.parametrize("op", ["+", "-", "*", "/"])
	def test_identifier_operand_is_kept(self, op: str):
		node = Binary(op, Number(1), x)  # pyright: ignore[reportArgumentType]
		assert optimize(node) == node

	def test_inner_constant_is_folded(self):
		node = Binary("+", Binary("+", Number(2), Number(2)), x)
		assert optimize(node) == Binary("+", Number(4), x)

	def test_fold_stops_at_identifier(self):
		# (x + 1) + 2 is not reassociated
		node = Binary("+", Binary("+", x, Number(1)), Number(2))
		assert optimize(node) == node

	def test_meta_is_kept_on_unfolded_node(self):
		node = Binary("+", Number(1), x, Meta(debug=True))
		assert optimize(node).meta == Meta(debug=True)  # pyright: ignore[reportAttributeAccessIssue]


# =============================================================================
# Boxed literals
# =============================================================================


class TestBoxed:
	def test_empty_shell_collapses(self):
		assert optimize(Boxed(0)) == Number(0)

	def test_shell_with_debug_meta_is_kept(self):
		node = Boxed(0, Meta(debug=True))
		assert optimize(node) == node

	def test_collapsed_shell_folds_with_parent(self):
		node = Binary("+", Boxed(1), Boxed(2.5))
		assert optimize(node) == Number(3.5)


# =============================================================================
# Descent into other nodes
# =============================================================================


class TestDescent:
	"""Folding happens at every depth."""

	def test_leaves_unchanged(self):
		assert optimize(x) == x
		assert optimize(NIL) == NIL
		assert optimize(Number(2.0)) == Number(2.0)

	def test_inside_fn_return(self):
		node = Fn(
			(x,),
			(Return(Binary("+", Binary("+", Number(2), Number(2)), x)),),
		)
		assert optimize(node) == Fn((x,), (Return(Binary("+", Number(4), x)),))

	def test_inside_fn_return_mul(self):
		node = Fn(
			(x,),
			(Return(Binary("*", Binary("*", Number(2), Number(2)), x)),),
		)
		assert optimize(node) == Fn((x,), (Return(Binary("*", Number(4), x)),))

	def test_inside_def(self):
		node = Def(
			"f",
			(),
			(Assign(x, Binary("*", Number(3), Number(3))), Return(x)),
			private=True,
		)
		assert optimize(node) == Def(
			"f", (), (Assign(x, Number(9)), Return(x)), private=True
		)

	def test_inside_sequence(self):
		node = Sequence((Binary("+", Number(1), Number(1)), x))
		assert optimize(node) == Sequence((Number(2), x))

	def test_sequence_itself_is_never_folded(self):
		node = Sequence((Number(1), Number(2)))
		assert optimize(node) == node

	def test_inside_call_args(self):
		node = Call(("List",), "first", (Binary("-", Number(5), Number(1)),))
		assert optimize(node) == Call(("List",), "first", (Number(4),))

	def test_inside_length(self):
		node = Length((Sequence((Binary("/", Number(1), Number(2)),)),))
		assert optimize(node) == Length((Sequence((Number(0.5),)),))

	def test_inside_block(self):
		node = Block((Assign(x, Binary("+", Number(1), Number(1))), x))
		assert optimize(node) == Block((Assign(x, Number(2)), x))

	def test_input_tree_is_not_modified(self):
		inner = Binary("+", Number(2), Number(2))
		node = Return(inner)
		optimize(node)
		assert node.value is inner

	def test_unknown_node_type(self):
		class Stray(Node):
			pass

		with pytest.raises(TypeError, match="Cannot optimize Stray"):
			optimize(Stray())


# =============================================================================
# Idempotence
# =============================================================================


@pytest.mark.parametrize(
	"tree",
	[
		Number(1),
		Binary("/", Number(4), Number(2)),
		Binary("/", Number(1), Number(0)),
		chain("+", list(range(1, 9))),
		Binary("+", Binary("+", x, Number(1)), Binary("*", Number(2), Number(3))),
		Fn((x,), (Return(Binary("+", Binary("+", Number(2), Number(2)), x)),)),
		Boxed(7),
		Boxed(7, Meta(debug=True)),
		Sequence((Binary("-", Number(1), Number(3)), Sequence(()))),
		Length((Call(("Window", "Console"), "log", (Number(1),)),)),
	],
)
def test_optimize_is_idempotent(tree: Node):
	once = optimize(tree)
	assert optimize(once) == once
