"""SQL validation and utilities package."""

from .statement_splitter import ScanState, split_statements
from .query_validator import (
    QueryValidator,
    SAFE_KEYWORDS,
    SUSPICIOUS_PATTERNS,
    WRITE_OPERATIONS,
    find_suspicious_patterns,
    is_write_statement,
    leading_keyword,
)

__all__ = [
    'QueryValidator',
    'ScanState',
    'SAFE_KEYWORDS',
    'SUSPICIOUS_PATTERNS',
    'WRITE_OPERATIONS',
    'find_suspicious_patterns',
    'is_write_statement',
    'leading_keyword',
    'split_statements'
]
