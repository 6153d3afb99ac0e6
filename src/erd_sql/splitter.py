"""
Statement splitting
===================

Comment stripping and paren-aware splitting shared by the statement
splitter and the fallback parser.
"""
import re
from typing import List, Optional, Tuple

from .errors import EmptyInputError, NoTableDefinitionError

LINE_COMMENT = re.compile(r'--.*$', re.MULTILINE)
BLOCK_COMMENT = re.compile(r'/\*.*?\*/', re.DOTALL)
CREATE_TABLE = re.compile(r'CREATE\s+TABLE', re.IGNORECASE)


def strip_comments(sql_text: str) -> str:
    """Remove ``--`` line comments and ``/* */`` block comments."""
    without_blocks = BLOCK_COMMENT.sub('', sql_text)
    return LINE_COMMENT.sub('', without_blocks).strip()


def split_top_level(text: str, separator: str) -> List[str]:
    """Split on ``separator`` only where paren depth is zero; drop blank parts."""
    parts = []
    current = []
    depth = 0
    for char in text:
        if char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
        elif char == separator and depth == 0:
            parts.append(''.join(current).strip())
            current = []
            continue
        current.append(char)
    parts.append(''.join(current).strip())
    return [part for part in parts if part]


def split_by_commas(content: str) -> List[str]:
    """``"a DECIMAL(10,2), b INT"`` -> ``["a DECIMAL(10,2)", "b INT"]``"""
    return split_top_level(content, ',')


def split_statements(sql_text: str) -> List[str]:
    """
    Clean ``sql_text`` and split it into statements.

    Raises:
        EmptyInputError: the input is blank, or blank once comments are removed
        NoTableDefinitionError: no ``CREATE TABLE`` appears anywhere
    """
    if sql_text is None or not isinstance(sql_text, str) or not sql_text.strip():
        raise EmptyInputError()

    cleaned = strip_comments(sql_text)
    if not cleaned:
        raise EmptyInputError('Invalid SQL: No valid SQL content found after removing comments')

    if not CREATE_TABLE.search(cleaned):
        raise NoTableDefinitionError()

    return split_top_level(cleaned, ';')


def extract_parenthesized(text: str, start: int = 0) -> Optional[Tuple[str, int]]:
    """
    Return the body of the first balanced ``( ... )`` at or after ``start``
    together with the index of its closing paren, or None when unbalanced.
    """
    open_idx = text.find('(', start)
    if open_idx == -1:
        return None

    depth = 0
    for i, char in enumerate(text[open_idx:], open_idx):
        if char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
            if depth == 0:
                return text[open_idx + 1:i], i
    return None
