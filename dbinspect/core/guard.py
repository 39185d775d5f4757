from dataclasses import dataclass
from typing import Optional, Tuple

from dbinspect.core.errors import QueryGuardRejection


# -----------------------------------------------------------------------------
# GUARD MODULE - Read-only query check
# Purpose: decide whether a raw SQL text may be sent to the database
# Why: second line of defense; the database role is expected to be read-only too
#
# This is a substring blocklist, not a parser. Known gaps:
#   - false positives: "insert " inside a literal, a comment or an identifier
#     such as reinsert_log is rejected
#   - false negatives: a keyword followed by a newline or tab, stored procedures
#     or functions that write, anything after a ';' that avoids the exact substrings
#   - multi-statement text is not checked here; asyncpg prepares every
#     statement, so the database refuses it and the caller gets a 400
# Changing this behavior is a policy change, keep it in sync with the tests.
# -----------------------------------------------------------------------------

# Each keyword carries its trailing space; matching is plain substring search
FORBIDDEN_KEYWORDS: Tuple[str, ...] = (
    "insert ",
    "update ",
    "delete ",
    "drop ",
    "alter ",
    "create ",
    "truncate ",
)

READ_ONLY_MESSAGE = "Only read-only operations are allowed"


@dataclass(frozen=True)
class GuardResult:
    allowed: bool
    reason: Optional[str] = None


def normalize(sql: str) -> str:
    return sql.strip().lower()


def classify(sql: str) -> GuardResult:
    """
    Classify a SQL text as read-only or rejected.

    Args:
        sql: Raw SQL exactly as the caller sent it.

    Returns:
        GuardResult(allowed=True) or GuardResult(allowed=False, reason=...).

    Example:
        classify("SELECT 1").allowed  # True
        classify("DROP TABLE users").reason  # "Only read-only operations are allowed"
    """
    normalized = normalize(sql)

    if any(keyword in normalized for keyword in FORBIDDEN_KEYWORDS):
        return GuardResult(allowed=False, reason=READ_ONLY_MESSAGE)

    return GuardResult(allowed=True)


def ensure_read_only(sql: str) -> None:
    """Raise QueryGuardRejection when classify() rejects the text."""
    verdict = classify(sql)
    if not verdict.allowed:
        raise QueryGuardRejection(verdict.reason)
