"""Compile a small Elixir subset to minified JavaScript."""

# Pipeline
from exjs.compiler import compile as compile
from exjs.compiler import compile_file as compile_file

# Errors
from exjs.errors import Location as Location
from exjs.errors import ParseError as ParseError
from exjs.generator import generate as generate

# Nodes
from exjs.nodes import NIL as NIL
from exjs.nodes import Assign as Assign
from exjs.nodes import Binary as Binary
from exjs.nodes import Block as Block
from exjs.nodes import Boxed as Boxed
from exjs.nodes import Call as Call
from exjs.nodes import Def as Def
from exjs.nodes import Fn as Fn
from exjs.nodes import Identifier as Identifier
from exjs.nodes import Length as Length
from exjs.nodes import Meta as Meta
from exjs.nodes import Nil as Nil
from exjs.nodes import Node as Node
from exjs.nodes import Number as Number
from exjs.nodes import Return as Return
from exjs.nodes import Sequence as Sequence

# Stages
from exjs.optimizer import optimize as optimize
from exjs.parser import parse as parse

__version__ = "0.1.0"
