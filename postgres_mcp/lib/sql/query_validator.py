"""SQL Query Validation for PostgreSQL MCP Server.

This module decides whether a query may run. It splits the query into
statements, classifies each one as a read or a write from its leading
keyword, and logs queries that look like injection attempts.

It is a heuristic gate, not a parser.
"""

import logging
import re
from typing import List, Optional

from postgres_mcp.lib.logging_config import get_logger, log_context
from postgres_mcp.lib.sql.statement_splitter import split_statements
from postgres_mcp.models.error_types import QueryValidationError


WRITE_OPERATIONS = frozenset({
    'insert', 'update', 'delete', 'truncate', 'drop', 'alter', 'create',
    'grant', 'revoke', 'import', 'copy', 'merge', 'upsert', 'replace',
})

# Leading keywords that never mutate state
SAFE_KEYWORDS = frozenset({
    'select', 'with', 'show', 'explain', 'values', 'table', 'describe', 'desc',
})

SUSPICIOUS_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r';\s*drop\s+',
        r';\s*delete\s+from\s+',
        r'union\s+all\s+select\s+null',
        r'/\*.*\*/\s*drop',
        r'--.*drop\s+',
        r'xp_cmdshell',
        r'exec\s*\(',
    )
)

WRITES_DISABLED_MESSAGE = "Write operations are disabled. Consult a human to enable this."

_WORD = re.compile(r'\w+')


def _skip_prefix(statement: str) -> str:
    """Drop leading whitespace, open parentheses and comments."""
    rest = statement
    while True:
        rest = rest.lstrip()
        if rest.startswith('('):
            rest = rest[1:]
        elif rest.startswith('--'):
            newline = rest.find('\n')
            rest = '' if newline == -1 else rest[newline + 1:]
        elif rest.startswith('/*'):
            end = rest.find('*/', 2)
            rest = '' if end == -1 else rest[end + 2:]
        else:
            return rest


def leading_keyword(statement: str) -> Optional[str]:
    """Return the lowercased first keyword of a statement, if any."""
    match = _WORD.match(_skip_prefix(statement))
    if not match:
        return None
    return match.group(0).lower()


def is_write_statement(statement: str) -> bool:
    """Classify a single statement as a write operation.

    Anything whose leading keyword is not known to be safe counts as a write.
    A ``WITH`` statement counts as a write when any write keyword appears
    anywhere in its text, including string literals and aliases.

    Args:
        statement: One SQL statement

    Returns:
        True if the statement may modify data or schema
    """
    keyword = leading_keyword(statement)
    if keyword is None:
        return False

    if keyword == 'with':
        lowered = statement.lower()
        return any(operation in lowered for operation in WRITE_OPERATIONS)

    return keyword not in SAFE_KEYWORDS


def find_suspicious_patterns(query: str) -> List[str]:
    """Return the source of every suspicious pattern found in the query."""
    return [pattern.pattern for pattern in SUSPICIOUS_PATTERNS if pattern.search(query)]


class QueryValidator:
    """Validates queries against the server's write policy."""

    def __init__(self, allow_write_ops: bool, logger: Optional[logging.Logger] = None):
        """Initialize the validator.

        Args:
            allow_write_ops: Whether write statements are permitted
            logger: Logger receiving warnings and debug traces
        """
        self._allow_write_ops = allow_write_ops
        self.logger = logger if logger is not None else get_logger(__name__)

    @property
    def allow_write_ops(self) -> bool:
        return self._allow_write_ops

    def validate(self, query: str) -> None:
        """Validate a SQL query for safety.

        Args:
            query: SQL query string to validate

        Raises:
            QueryValidationError: If the query is empty, or contains a write
                statement while writes are disabled
        """
        if not query or not query.strip():
            raise QueryValidationError("Query cannot be empty")

        self._check_for_sql_injection(query)

        if not self._allow_write_ops:
            self._check_read_only(query)

        self.logger.debug(
            "Query validated successfully",
            extra=log_context(query_length=len(query), allow_write_ops=self._allow_write_ops)
        )

    def _check_for_sql_injection(self, query: str) -> None:
        for pattern in find_suspicious_patterns(query):
            self.logger.warning(
                "Suspicious SQL pattern detected",
                extra=log_context(pattern=pattern, query=query[:100])
            )

    def _check_read_only(self, query: str) -> None:
        for position, statement in enumerate(split_statements(query), start=1):
            if is_write_statement(statement):
                raise QueryValidationError(
                    WRITES_DISABLED_MESSAGE,
                    statement=statement,
                    position=position
                )
