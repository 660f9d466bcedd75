"""Translation of Python syntax trees into :mod:`autofd.expr` expressions."""

import ast
import io
import logging
import tokenize

from autofd.errors import UnsupportedExpression
from autofd.expr import (
    BinaryOp,
    BinaryOperator,
    Call,
    Expression,
    Grouping,
    Identifier,
    Literal,
    NamespacedRef,
    UnaryOp,
    UnaryOperator,
)

logger = logging.getLogger(__name__)

_BIN_OPS = {
    ast.Add: BinaryOperator.ADD,
    ast.Sub: BinaryOperator.SUB,
    ast.Mult: BinaryOperator.MUL,
    ast.Div: BinaryOperator.DIV,
    ast.Pow: BinaryOperator.POW,
}
_UNARY_OPS = {
    ast.UAdd: UnaryOperator.PLUS,
    ast.USub: UnaryOperator.MINUS,
}

_SKIPPED = frozenset(
    (tokenize.NL, tokenize.NEWLINE, tokenize.COMMENT, tokenize.INDENT, tokenize.DEDENT)
)

type _Position = tuple[int, int]


class ParenIndex:
    """Index of the parentheses surrounding each span of a source text.

    Python's syntax tree does not record redundant parentheses. They are recovered
    from the token stream instead: the parentheses that wrap exactly a node are the
    innermost pairs of the ``(`` tokens right before it and the ``)`` tokens right
    after it.

    Parameters
    ----------
    source : str
        Text the node positions refer to.
    """

    __slots__ = ("_lines", "_opening", "_closing")
    _lines: list[str]
    _opening: dict[_Position, int]
    _closing: dict[_Position, int]

    def __init__(self, source: str):
        self._lines = source.splitlines(keepends=True)
        self._opening = {}
        self._closing = {}

        tokens = [
            tok
            for tok in tokenize.generate_tokens(io.StringIO(source).readline)
            if tok.type not in _SKIPPED
        ]

        for i, tok in enumerate(tokens):
            count = 0

            while i - count - 1 >= 0 and tokens[i - count - 1].string == "(":
                count += 1

            self._opening[tok.start] = count
            count = 0

            while i + count + 1 < len(tokens) and tokens[i + count + 1].string == ")":
                count += 1

            self._closing[tok.end] = count

    def _position(self, lineno: int, col_offset: int) -> _Position:
        # Node offsets count UTF-8 bytes while tokens count characters.
        line = self._lines[lineno - 1].encode()
        return lineno, len(line[:col_offset].decode())

    def count(self, node: ast.expr, parent: ast.AST | None = None) -> int:
        """Return the number of parenthesis pairs wrapping exactly `node`.

        Parentheses that belong to the argument list of `parent` are not counted. A
        node without source positions has none.
        """
        lineno = getattr(node, "lineno", None)
        end_lineno = getattr(node, "end_lineno", None)

        if lineno is None or end_lineno is None:
            return 0

        start = self._position(lineno, node.col_offset)
        end = self._position(end_lineno, node.end_col_offset)  # type: ignore
        opening = self._opening.get(start, 0)
        closing = self._closing.get(end, 0)

        if isinstance(parent, ast.Call) and parent.args:
            if node is parent.args[0]:
                opening -= 1

            if node is parent.args[-1]:
                closing -= 1

        return max(0, min(opening, closing))


def adapt(node: ast.expr, source: str | None = None) -> Expression:
    """Translate `node` into a closed :mod:`autofd.expr` tree.

    Parameters
    ----------
    node : ast.expr
    source : str | None, default=None
        Text the positions of `node` refer to. If given, redundant parentheses are
        preserved as :class:`~autofd.expr.Grouping`.

    Raises
    ------
    UnsupportedExpression
        If `node` contains a construct outside the grammar.

    Examples
    --------
    >>> import ast
    >>> src = "2 / (x * x)"
    >>> adapt(ast.parse(src, mode="eval").body, src)  # doctest: +NORMALIZE_WHITESPACE
    BinaryOp(op=<BinaryOperator.DIV>, left=Literal(value=2),
             right=Grouping(inner=BinaryOp(op=<BinaryOperator.MUL>,
             left=Identifier(name='x'), right=Identifier(name='x'))))
    """
    parens = ParenIndex(source) if source is not None else None
    return _Adapter(parens, source).visit(node, None)


class _Adapter:
    __slots__ = ("_parens", "_source")
    _parens: ParenIndex | None
    _source: str | None

    def __init__(self, parens: ParenIndex | None, source: str | None):
        self._parens = parens
        self._source = source

    def visit(self, node: ast.expr, parent: ast.AST | None) -> Expression:
        result = self._convert(node)

        if self._parens is not None:
            for _ in range(self._parens.count(node, parent)):
                result = Grouping(result)

        return result

    def _convert(self, node: ast.expr) -> Expression:
        match node:
            case ast.Constant(value=bool()):
                raise self._unsupported("boolean literal", node)

            case ast.Constant(value=int() | float() as value):
                return Literal(value)

            case ast.Name(id=name):
                return Identifier(name)

            case ast.UnaryOp(op=op, operand=operand) if type(op) in _UNARY_OPS:
                return UnaryOp(_UNARY_OPS[type(op)], self.visit(operand, node))

            case ast.BinOp(op=op, left=left, right=right) if type(op) in _BIN_OPS:
                return BinaryOp(
                    _BIN_OPS[type(op)],
                    self.visit(left, node),
                    self.visit(right, node),
                )

            case ast.Call(func=func, args=args, keywords=[]):
                if any(isinstance(x, ast.Starred) for x in args):
                    raise self._unsupported("starred argument", node)

                callee = self.visit(func, node)
                return Call(callee, tuple(self.visit(x, node) for x in args))

            case ast.Attribute(value=ast.Name(id=namespace), attr=member):
                return NamespacedRef(namespace, member)

            case _:
                raise self._unsupported(type(node).__name__, node)

    def _unsupported(self, kind: str, node: ast.expr) -> UnsupportedExpression:
        construct = self._segment(node)
        logger.debug(f"rejecting {kind}: {construct}")
        message = f"invalid expression {construct!r} ({kind})"
        return UnsupportedExpression(message, construct)

    def _segment(self, node: ast.expr) -> str:
        if self._source is not None:
            if (segment := ast.get_source_segment(self._source, node)) is not None:
                return segment

        return ast.unparse(node)
