from typing import Optional


# Matched as plain substrings of the lower-cased query, so identifiers such as
# "updated_at" are rejected too.
BLOCKED_KEYWORDS = (
    "insert",
    "update",
    "delete",
    "drop",
    "create",
    "alter",
    "truncate",
    "replace",
    "grant",
    "revoke",
    "set ",
    "call",
    "exec",
    "execute",
    "prepare",
)


def is_read_only(sql: Optional[str]) -> bool:
    """
    Decide whether client SQL may be forwarded to the reader connection.

    The text must start with ``select`` and must not contain any blocked
    keyword anywhere. This check is a second line of defence only: the
    reader database account has to be restricted to SELECT by the server.

    Args:
        sql: Already URL-decoded query text.

    Returns:
        True when the query is admitted.

    Example:
        is_read_only("SELECT * FROM patient")  # True
        is_read_only("select name from updates")  # False
    """
    if not sql:
        return False

    normalized = sql.strip().lower()
    if not normalized.startswith("select"):
        return False

    return not any(keyword in normalized for keyword in BLOCKED_KEYWORDS)
