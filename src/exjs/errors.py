from __future__ import annotations

from dataclasses import dataclass
from typing import override


@dataclass(frozen=True, slots=True)
class Location:
	"""1-based line and column of a lexeme in the source text."""

	line: int
	column: int

	@override
	def __str__(self) -> str:
		return f"line {self.line}, column {self.column}"


class ParseError(SyntaxError):
	"""Source text is outside the supported grammar.

	Subclasses the built-in SyntaxError so callers can catch either.
	"""

	message: str
	location: Location | None

	def __init__(
		self,
		message: str,
		location: Location | None = None,
		text: str | None = None,
	) -> None:
		if location is None:
			super().__init__(message)
		else:
			super().__init__(
				message, ("<source>", location.line, location.column, text)
			)
		self.message = message
		self.location = location

	@override
	def __str__(self) -> str:
		if self.location is None:
			return self.message
		return f"{self.message} ({self.location})"
