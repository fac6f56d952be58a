from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from typing import Literal, TypeAlias, override

BinaryOp: TypeAlias = Literal["+", "-", "*", "/"]

BINARY_OPS: frozenset[str] = frozenset({"+", "-", "*", "/"})


# =============================================================================
# Metadata
# =============================================================================


@dataclass(frozen=True, slots=True)
class Meta:
	"""Per-node metadata.

	Positions are never stored here. A `debug` flag survives parsing and
	optimization untouched and is ignored by the generator.
	"""

	debug: bool | None = None

	def is_empty(self) -> bool:
		return self.debug is None


EMPTY_META = Meta()


# =============================================================================
# Base class
# =============================================================================


class Node(ABC):
	"""Base class for all AST nodes."""

	__slots__: tuple[str, ...] = ()


# =============================================================================
# Leaves
# =============================================================================


@dataclass(frozen=True, slots=True, eq=False)
class Number(Node):
	"""Integer or float literal: 2, 2.0

	Equality is type-strict so that Number(2) != Number(2.0).
	"""

	value: int | float

	@override
	def __eq__(self, other: object) -> bool:
		if not isinstance(other, Number):
			return NotImplemented
		return type(self.value) is type(other.value) and self.value == other.value

	@override
	def __hash__(self) -> int:
		return hash((Number, type(self.value), self.value))


@dataclass(frozen=True, slots=True)
class Boxed(Node):
	"""Literal carried in a node shell together with its metadata."""

	value: int | float
	meta: Meta = EMPTY_META


@dataclass(frozen=True, slots=True)
class Identifier(Node):
	"""Reference to a variable or parameter: x"""

	name: str
	meta: Meta = EMPTY_META


@dataclass(frozen=True, slots=True)
class Nil(Node):
	"""Explicit absence of value."""


NIL = Nil()


# =============================================================================
# Compounds
# =============================================================================


@dataclass(frozen=True, slots=True)
class Binary(Node):
	"""Arithmetic: left op right"""

	op: BinaryOp
	left: Node
	right: Node
	meta: Meta = EMPTY_META


@dataclass(frozen=True, slots=True)
class Assign(Node):
	"""Assignment: target = value"""

	target: Identifier
	value: Node
	meta: Meta = EMPTY_META


@dataclass(frozen=True, slots=True)
class Sequence(Node):
	"""List or tuple literal. Both forms share this representation."""

	elements: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True)
class Return(Node):
	"""Implicit return of the last statement of a function body."""

	value: Node
	meta: Meta = EMPTY_META


@dataclass(frozen=True, slots=True)
class Fn(Node):
	"""Anonymous function: fn(params) -> body end"""

	params: tuple[Identifier, ...]
	body: tuple[Node, ...]
	meta: Meta = EMPTY_META


@dataclass(frozen=True, slots=True)
class Def(Node):
	"""Named function: def name(params) do body end

	`private` marks the `defp` form.
	"""

	name: str
	params: tuple[Identifier, ...]
	body: tuple[Node, ...]
	private: bool = False
	meta: Meta = EMPTY_META


@dataclass(frozen=True, slots=True)
class Call(Node):
	"""Qualified call: Seg1.Seg2.member(args)

	`path` holds the alias segments verbatim; renaming them is up to the
	generator.
	"""

	path: tuple[str, ...]
	member: str
	args: tuple[Node, ...] = ()
	meta: Meta = EMPTY_META


@dataclass(frozen=True, slots=True)
class Length(Node):
	"""Built-in length. Only the first argument is used."""

	args: tuple[Node, ...]
	meta: Meta = EMPTY_META


@dataclass(frozen=True, slots=True)
class Block(Node):
	"""Several top-level statements."""

	body: tuple[Node, ...] = ()
