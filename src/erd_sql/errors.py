"""
Errors raised by the import pipeline.

Messages are phrased so a message-pattern classifier can bucket them
(see ``erd_sql.error_report``).
"""
from typing import List, Optional


class SchemaError(Exception):
    """Base class for every error the engine raises."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmptyInputError(SchemaError):
    def __init__(self, message: str = 'Invalid input: SQL text cannot be empty'):
        super().__init__(message)


class NoTableDefinitionError(SchemaError):
    def __init__(self):
        super().__init__(
            'Invalid SQL: No CREATE TABLE statements found. '
            'Please ensure your SQL contains table definitions.'
        )


class StatementParseError(SchemaError):
    """One statement that a parser strategy could not handle."""

    def __init__(self, reason: str, statement: str = '', index: Optional[int] = None, strategy: str = ''):
        self.reason = reason
        self.statement = statement
        self.index = index
        self.strategy = strategy
        super().__init__(self._format())

    def _format(self) -> str:
        label = f"statement {self.index}" if self.index is not None else 'statement'
        if self.strategy:
            label += f" ({self.strategy})"
        return f"Failed to parse {label}: {self.reason}"

    def at(self, index: int) -> 'StatementParseError':
        return StatementParseError(self.reason, self.statement, index, self.strategy)


class SchemaParseError(SchemaError):
    """No table survived parsing; carries every per-statement failure."""

    def __init__(self, errors: List[StatementParseError]):
        self.errors = list(errors)
        if self.errors:
            details = 'Failed statements:\n' + '\n'.join(e.message for e in self.errors)
        else:
            details = 'No CREATE TABLE statements could be parsed successfully'
        super().__init__(f"No tables were successfully parsed from the SQL. {details}")


class ConstraintError(SchemaError):
    pass


class SchemaValidationError(SchemaError):
    def __init__(self, violations: List[str]):
        self.violations = list(violations)
        super().__init__('Schema validation failed:\n' + '\n'.join(self.violations))
