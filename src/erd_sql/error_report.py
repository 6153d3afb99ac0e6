"""
Error categorization for user-facing reports.

Errors are bucketed by message pattern into one of: syntax, parsing,
constraint, validation, import, export, network, unknown.
"""
import re
import traceback
from dataclasses import dataclass, field
from typing import List

SYNTAX_PATTERNS = [
    r'syntax error',
    r'unexpected token',
    r'missing.*[,;)]',
    r'expected.*but found',
    r'invalid.*syntax',
    r'parse.*error',
    r'unexpected.*character',
]

PARSING_PATTERNS = [
    r'failed to parse',
    r'cannot parse',
    r'parsing.*failed',
    r'invalid.*structure',
    r'unsupported.*format',
    r'malformed.*sql',
    r'no tables were successfully parsed',
]

CONSTRAINT_PATTERNS = [
    r'foreign key',
    r'constraint.*violation',
    r'reference.*not found',
    r'table.*not found',
    r'column.*not found',
    r'primary key',
    r'unique.*constraint',
]

VALIDATION_PATTERNS = [
    r'validation.*failed',
    r'invalid.*data',
    r'required.*field',
    r'missing.*required',
    r'duplicate.*name',
    r'empty.*table',
]

NETWORK_PATTERNS = [
    r'network.*error',
    r'connection.*failed',
    r'timeout',
    r'fetch.*failed',
    r'cors.*error',
]

TITLES = {
    'syntax': 'SQL Syntax Error',
    'parsing': 'SQL Parsing Error',
    'validation': 'Schema Validation Error',
    'constraint': 'Foreign Key Constraint Error',
    'export': 'SQL Export Failed',
    'import': 'Schema Import Failed',
    'network': 'Network Error',
    'unknown': 'Unexpected Error',
}

MESSAGES = {
    'syntax': 'There is a syntax error in your SQL statement.',
    'parsing': 'Unable to parse the SQL schema. The SQL structure may not be supported.',
    'constraint': 'There is an issue with foreign key relationships in your schema.',
    'validation': 'The schema contains validation errors that prevent processing.',
    'import': 'Failed to import the SQL schema. Please check your SQL format.',
    'export': 'Failed to generate SQL from your schema. There may be an issue with the table definitions.',
    'network': 'A network error occurred while processing your request.',
    'unknown': 'An unexpected error occurred while processing your request.',
}

SUGGESTIONS = {
    'syntax': [
        'Check for missing commas, semicolons, or parentheses',
        'Ensure proper SQL keyword usage (CREATE TABLE, etc.)',
        'Verify table and column names are valid',
        'Make sure string values are properly quoted',
    ],
    'parsing': [
        "Ensure you're using standard SQL CREATE TABLE statements",
        'Check that foreign key references are properly formatted',
        'Verify that data types are supported',
        'Try simplifying complex table definitions',
    ],
    'constraint': [
        'Ensure referenced tables exist before creating foreign keys',
        'Check that referenced columns exist in the target table',
        'Verify data types match between foreign key and referenced columns',
        'Make sure primary keys are defined before being referenced',
    ],
    'validation': [
        'Check that all tables have at least one column',
        'Ensure primary keys are properly defined',
        'Verify foreign key references point to existing tables and columns',
        'Make sure column names are unique within each table',
    ],
    'import': [
        'Ensure your SQL contains valid CREATE TABLE statements',
        'Check that the SQL is properly formatted with semicolons',
        'Remove any database-specific syntax not supported',
        'Try importing a smaller schema first to test',
    ],
    'export': [
        'Check that all tables have valid names and columns',
        'Ensure foreign key relationships are properly configured',
        'Verify that all required fields are filled in',
        'Try removing complex constraints and export again',
    ],
    'network': [
        'Check your internet connection',
        'Try again in a few moments',
        'Ensure no firewall is blocking the application',
    ],
    'unknown': [
        'Try the operation again',
        'Run with --verbose for additional details',
        'If the problem persists, try with a simpler schema',
    ],
}


@dataclass
class ErrorReport:
    type: str
    title: str
    message: str
    details: str
    suggestions: List[str] = field(default_factory=list)
    retryable: bool = True


def _matches(patterns, message):
    return any(re.search(pattern, message, re.IGNORECASE) for pattern in patterns)


def classify_message(message, context='unknown'):
    """
    Return the error type for ``message``.

    Syntax is checked before parsing, parsing before constraint, and so on;
    ``context`` ('import' / 'export') only decides when no pattern matches.
    """
    if _matches(SYNTAX_PATTERNS, message):
        return 'syntax'
    if _matches(PARSING_PATTERNS, message):
        return 'parsing'
    if _matches(CONSTRAINT_PATTERNS, message):
        return 'constraint'
    if _matches(VALIDATION_PATTERNS, message):
        return 'validation'
    if context in ('import', 'export'):
        return context
    if _matches(NETWORK_PATTERNS, message):
        return 'network'
    return 'unknown'


def categorize_error(error, context='unknown'):
    message = getattr(error, 'message', None) or str(error)
    error_type = classify_message(message, context)

    details = message
    if error_type == 'unknown' and isinstance(error, BaseException):
        stack = ''.join(traceback.format_exception(type(error), error, error.__traceback__))
        details = f"{message}\n\nStack trace:\n{stack}"

    return ErrorReport(
        type=error_type,
        title=get_error_title(error_type),
        message=MESSAGES[error_type],
        details=details,
        suggestions=list(SUGGESTIONS[error_type]),
    )


def get_error_title(error_type):
    return TITLES.get(error_type, 'Error')


def format_suggestions(suggestions):
    return '\n'.join(f"{index}. {suggestion}" for index, suggestion in enumerate(suggestions, 1))
