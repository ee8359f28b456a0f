"""Read-only access to the text, tokens and comments of one Python source.

Positions are character offsets into the source text, so ranges taken from
tokens and from syntax-tree nodes can be compared, sliced and combined
directly.  ``ast`` reports columns as UTF-8 byte offsets; ``offset`` converts
them.
"""

import ast
import bisect
import io
import re
import tokenize
from enum import Enum
from typing import Iterator, List, NamedTuple, Optional, Tuple, Union

Range = Tuple[int, int]

# Token types that carry no text of their own between two real tokens.
_LAYOUT_TOKENS = frozenset(
    (
        tokenize.NL,
        tokenize.NEWLINE,
        tokenize.INDENT,
        tokenize.DEDENT,
        tokenize.ENDMARKER,
    )
)
_NEWLINE = re.compile("\n")


class CommentKind(Enum):
    LINE = "line"
    BLOCK = "block"


class Token(NamedTuple):
    type: str
    value: str
    range: Range
    start_line: int
    end_line: int
    comment: Optional[CommentKind] = None


class SourceCode:
    """A parsed source text, with the lookups the rule needs.

    The text is never modified; fixes are described as edits against it.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.tree = ast.parse(text)
        self._line_starts = [0] + [m.end() for m in _NEWLINE.finditer(text)]
        self.tokens: List[Token] = list(self._tokenize())
        self._starts = [t.range[0] for t in self.tokens]
        self._ends = [t.range[1] for t in self.tokens]

    def _tokenize(self) -> Iterator[Token]:
        for tok in tokenize.generate_tokens(io.StringIO(self.text).readline):
            if tok.type in _LAYOUT_TOKENS:
                continue
            start = self._line_starts[tok.start[0] - 1] + tok.start[1]
            end = self._line_starts[tok.end[0] - 1] + tok.end[1]
            yield Token(
                type=tokenize.tok_name[tok.type],
                value=tok.string,
                range=(start, end),
                start_line=tok.start[0],
                end_line=tok.end[0],
                comment=CommentKind.LINE if tok.type == tokenize.COMMENT else None,
            )

    def line_of(self, offset: int) -> int:
        """Return the 1-based line holding ``offset``."""
        return bisect.bisect_right(self._line_starts, offset)

    def position(self, offset: int) -> Tuple[int, int]:
        """Return the 1-based (line, column) of ``offset``."""
        line = self.line_of(offset)
        return line, offset - self._line_starts[line - 1] + 1

    def offset(self, lineno: int, col_offset: int) -> int:
        """Convert an ``ast`` (line, byte column) pair to a character offset."""
        start = self._line_starts[lineno - 1]
        if lineno < len(self._line_starts):
            line = self.text[start : self._line_starts[lineno]]
        else:
            line = self.text[start:]
        return start + len(line.encode("utf-8")[:col_offset].decode("utf-8"))

    def node_range(self, node: ast.AST) -> Range:
        return (
            self.offset(node.lineno, node.col_offset),  # type: ignore[attr-defined]
            self.offset(node.end_lineno, node.end_col_offset),  # type: ignore
        )

    def get_text(self, node: object) -> str:
        start, end = _range_of(node)
        return self.text[start:end]

    def in_string(self, offset: int) -> bool:
        """Return whether ``offset`` falls strictly inside a string token."""
        index = bisect.bisect_right(self._starts, offset) - 1
        if index < 0:
            return False
        token = self.tokens[index]
        return token.type == "STRING" and token.range[0] < offset < token.range[1]

    def get_token_before(
        self, node: Union[int, object], *, include_comments: bool = False
    ) -> Optional[Token]:
        index = bisect.bisect_right(self._ends, _start_of(node)) - 1
        while index >= 0:
            token = self.tokens[index]
            if include_comments or token.comment is None:
                return token
            index -= 1
        return None

    def get_token_after(
        self, node: Union[int, object], *, include_comments: bool = False
    ) -> Optional[Token]:
        index = bisect.bisect_left(self._starts, _end_of(node))
        while index < len(self.tokens):
            token = self.tokens[index]
            if include_comments or token.comment is None:
                return token
            index += 1
        return None

    def get_comments_before(self, node: object) -> List[Token]:
        """Return the comments between ``node`` and the token before it."""
        comments = []
        index = bisect.bisect_right(self._ends, _start_of(node)) - 1
        while index >= 0 and self.tokens[index].comment is not None:
            comments.append(self.tokens[index])
            index -= 1
        comments.reverse()
        return comments

    def get_comments_after(self, node: object) -> List[Token]:
        """Return the comments between ``node`` and the token after it."""
        comments = []
        index = bisect.bisect_left(self._starts, _end_of(node))
        while index < len(self.tokens) and self.tokens[index].comment is not None:
            comments.append(self.tokens[index])
            index += 1
        return comments


def _range_of(node: object) -> Range:
    return node.range  # type: ignore[attr-defined,no-any-return]


def _start_of(node: Union[int, object]) -> int:
    return node if isinstance(node, int) else _range_of(node)[0]


def _end_of(node: Union[int, object]) -> int:
    return node if isinstance(node, int) else _range_of(node)[1]
