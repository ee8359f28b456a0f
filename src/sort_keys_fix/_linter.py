"""Run the rule over a source text, and apply its fixes.

This is the host side of the rule: it validates the rule options against the
rule's schema, walks the tree dispatching events to the rule's listeners,
collects problems (each with at most one merged fix), and applies fixes pass
after pass until the source stops changing.
"""

import logging
from typing import Any, Callable, List, NamedTuple, Optional, Sequence, Tuple

import jsonschema
import jsonschema.exceptions

from . import _rule
from ._fixer import Edit, Fixer, merge_edits
from ._source import Range, SourceCode
from ._tree import walk

logger = logging.getLogger(__name__)

# Fixes for nested containers only converge over several passes.
MAX_PASSES = 10

Options = Optional[Sequence[Any]]


class InvalidOptionsError(ValueError):
    pass


class FixError(RuntimeError):
    pass


class Problem(NamedTuple):
    rule_id: str
    message: str
    line: int
    column: int
    end_line: int
    end_column: int
    fix: Optional[Edit] = None


class FixResult(NamedTuple):
    output: str
    problems: List[Problem]
    passes: int
    fixed: bool


class RuleContext:
    def __init__(self, rule_id: str, options: List[Any], source: SourceCode) -> None:
        self.id = rule_id
        self.options = options
        self.source_code = source
        self.problems: List[Problem] = []

    def report(
        self,
        *,
        node: Any,
        message: str,
        data: Optional[dict] = None,
        loc: Optional[Range] = None,
        fix: Optional[Callable[[Fixer], Sequence[Edit]]] = None,
    ) -> None:
        start, end = loc if loc is not None else node.range
        line, column = self.source_code.position(start)
        end_line, end_column = self.source_code.position(end)
        edits = list(fix(Fixer())) if fix is not None else []
        self.problems.append(
            Problem(
                rule_id=self.id,
                message=message.format(**(data or {})),
                line=line,
                column=column,
                end_line=end_line,
                end_column=end_column,
                fix=merge_edits(edits, self.source_code.text) if edits else None,
            )
        )


def validate_options(options: Options) -> List[Any]:
    """Check ``options`` against the rule schema, returning them as a list."""
    values = list(options or [])
    schema = {
        "type": "array",
        "items": _rule.SCHEMA,
        "maxItems": len(_rule.SCHEMA),
    }
    error = jsonschema.exceptions.best_match(
        jsonschema.Draft7Validator(schema).iter_errors(values)
    )
    if error is not None:
        raise InvalidOptionsError(
            f"Invalid options for rule {_rule.RULE_ID!r}: {error.message}"
        )
    return values


def _lint(text: str, options: List[Any]) -> List[Problem]:
    try:
        source = SourceCode(text)
    except SyntaxError as err:
        logger.error("Syntax error parsing source: %s", err)
        raise
    context = RuleContext(_rule.RULE_ID, options, source)
    listeners = _rule.create(context)
    for event, node in walk(source):
        listener = listeners.get(event)
        if listener is not None:
            listener(node)
    return sorted(context.problems, key=lambda p: (p.line, p.column))


def verify(text: str, options: Options = None) -> List[Problem]:
    """Return the problems the rule finds in ``text``, fixes included."""
    return _lint(text, validate_options(options))


def apply_fixes(text: str, problems: Sequence[Problem]) -> Tuple[str, int]:
    """Apply every fix that does not overlap one applied before it.

    Returns the new text and the number of fixes applied.  Skipped fixes are
    left for the next pass.
    """
    fixes = sorted(
        (p.fix for p in problems if p.fix is not None), key=lambda f: f.range
    )
    parts: List[str] = []
    cursor = 0
    last = -1
    applied = 0
    for fix in fixes:
        start, end = fix.range
        if start <= last:
            logger.debug("fix at %r overlaps an earlier fix; deferring", fix.range)
            continue
        parts.append(text[cursor:start])
        parts.append(fix.text)
        cursor = last = end
        applied += 1
    parts.append(text[cursor:])
    return "".join(parts), applied


def verify_and_fix(
    text: str, options: Options = None, *, max_passes: int = MAX_PASSES
) -> FixResult:
    """Fix ``text`` until no fixable problem is left or ``max_passes`` is hit.

    The returned problems are those remaining in the returned output.
    """
    options = validate_options(options)
    problems = _lint(text, options)
    passes = 0
    while passes < max_passes:
        output, applied = apply_fixes(text, problems)
        if not applied:
            break
        passes += 1
        logger.debug(
            "pass %d: applied %d of %d problems", passes, applied, len(problems)
        )
        text = output
        try:
            problems = _lint(text, options)
        except SyntaxError as err:
            raise FixError(f"fix in pass {passes} produced invalid source") from err
    return FixResult(output=text, problems=problems, passes=passes, fixed=passes > 0)
