from __future__ import annotations

import logging
from pathlib import Path

from exjs.env import env
from exjs.generator import generate
from exjs.optimizer import optimize as optimize_tree
from exjs.parser import parse

logger = logging.getLogger(__name__)


def compile(source: str, *, optimize: bool | None = None) -> str:
	"""Compile source text to minified JavaScript.

	Runs parse, optimize and generate in that order. Folding is skipped when
	`optimize` is False, or when it is None and EXJS_NO_OPTIMIZE is set.
	ParseError propagates unchanged and no output is produced.
	"""
	if optimize is None:
		optimize = env.optimize
	logger.debug("Parsing %d characters", len(source))
	tree = parse(source)
	logger.debug("Parsed %s", type(tree).__name__)
	if optimize:
		tree = optimize_tree(tree)
		logger.debug("Optimized to %s", type(tree).__name__)
	code = generate(tree)
	logger.debug("Generated %d characters", len(code))
	return code


def compile_file(path: str | Path, *, optimize: bool | None = None) -> str:
	"""Read a UTF-8 source file and compile it. OSError propagates."""
	path = Path(path)
	logger.debug("Reading %s", path)
	return compile(path.read_text(encoding="utf-8"), optimize=optimize)
