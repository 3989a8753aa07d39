"""Path rewriting between the watcher's and the remote system's view.

Rules are regular expressions paired with a replacement. The first rule
whose pattern matches the input is applied (all occurrences replaced);
when no rule matches, the input is returned unchanged.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

Rewriter = Callable[[str], str]

# $$, $1, ${1}, ${name}, \g<1>, \g<name>, \1, or any other backslash
_TEMPLATE_TOKEN = re.compile(r"\$\$|\$\{(\w+)\}|\$(\d+)|\\g<(\w+)>|\\(\d+)|\\")


class RewriteError(Exception):
    """Raised when a rewrite rule cannot be compiled."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid rewrite rule '{pattern}': {reason}")


@dataclass(frozen=True)
class RewriteRule:
    """A single from/to rewrite rule."""

    from_: str
    to: str


def _has_group(pattern: re.Pattern[str], ref: str) -> bool:
    if ref.isdigit():
        return int(ref) <= pattern.groups
    return ref in pattern.groupindex


def _translate_replacement(rule: RewriteRule, pattern: re.Pattern[str]) -> str:
    """Turn rule.to into a replacement string safe for pattern.sub.

    Group references become \\g<...>, "$$" becomes a literal "$" and every
    other backslash is kept literally, so "D:\\media\\" is a valid target.

    Raises:
        RewriteError: If a group reference names a group the pattern lacks.
    """

    def token(m: re.Match[str]) -> str:
        if m.group(0) == "$$":
            return "$"
        ref = next((g for g in m.groups() if g is not None), None)
        if ref is None:
            return "\\\\"
        if not _has_group(pattern, ref):
            raise RewriteError(rule.from_, f"unknown group reference '{ref}'")
        return rf"\g<{ref}>"

    return _TEMPLATE_TOKEN.sub(token, rule.to)


def new_rewriter(rules: Iterable[RewriteRule]) -> Rewriter:
    """Compile rewrite rules into a rewriter function.

    Args:
        rules: Rules in priority order.

    Returns:
        A pure function mapping a watcher path to the remote path.

    Raises:
        RewriteError: If any rule's pattern or replacement is invalid.
    """
    compiled: list[tuple[re.Pattern[str], str]] = []
    for rule in rules:
        try:
            pattern = re.compile(rule.from_)
        except re.error as e:
            raise RewriteError(rule.from_, str(e)) from e

        compiled.append((pattern, _translate_replacement(rule, pattern)))

    def rewrite(path: str) -> str:
        for pattern, replacement in compiled:
            if pattern.search(path):
                return pattern.sub(replacement, path)
        return path

    return rewrite
