"""A lint rule requiring sorted dict keys, with a comment-preserving fixer.

The public API is `verify` and `verify_and_fix`; check their docstrings for
details.
"""

__version__ = "0.1.0"
__all__ = [
    "FixError",
    "FixResult",
    "InvalidOptionsError",
    "Problem",
    "verify",
    "verify_and_fix",
]

from ._linter import (
    FixError,
    FixResult,
    InvalidOptionsError,
    Problem,
    verify,
    verify_and_fix,
)
