"""
Parse strategies
================

A strategy turns one statement string into a typed definition and reports
the outcome as a value. ``FallbackChain`` branches on that outcome: when
the primary strategy fails on a statement the fallback accepts, the
fallback gets a turn.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from .definitions import AlterTableDefinition, TableDefinition
from .errors import StatementParseError

logger = logging.getLogger(__name__)

ParsedDefinition = Union[TableDefinition, AlterTableDefinition]


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of one strategy on one statement.

    ``ok`` with ``definition=None`` means the statement was understood but
    is of a kind the schema does not model (``CREATE INDEX`` ...).
    """
    ok: bool
    definition: Optional[ParsedDefinition] = None
    error: Optional[StatementParseError] = None
    strategy: str = ''

    @classmethod
    def success(cls, definition: ParsedDefinition, strategy: str = '') -> 'ParseResult':
        return cls(ok=True, definition=definition, strategy=strategy)

    @classmethod
    def ignored(cls, strategy: str = '') -> 'ParseResult':
        return cls(ok=True, strategy=strategy)

    @classmethod
    def failure(cls, reason: str, statement: str, strategy: str = '') -> 'ParseResult':
        error = StatementParseError(reason, statement, strategy=strategy)
        return cls(ok=False, error=error, strategy=strategy)


class StatementParser:
    """Base class for parse strategies."""

    name = 'parser'

    def accepts(self, statement: str) -> bool:
        return True

    def parse(self, statement: str) -> ParseResult:
        raise NotImplementedError


@dataclass
class ChainOutcome:
    result: ParseResult
    errors: List[StatementParseError] = field(default_factory=list)


class FallbackChain:
    """Try ``primary``; on failure try ``fallback`` if it accepts the statement."""

    def __init__(self, primary: StatementParser, fallback: Optional[StatementParser] = None):
        self.primary = primary
        self.fallback = fallback

    def parse(self, statement: str, index: Optional[int] = None) -> ChainOutcome:
        errors = []

        result = self.primary.parse(statement)
        if result.ok:
            return ChainOutcome(result)

        errors.append(result.error.at(index) if index is not None else result.error)
        logger.warning("%s parser failed on statement %s: %s",
                       self.primary.name, index, result.error.reason)

        if self.fallback is None or not self.fallback.accepts(statement):
            return ChainOutcome(result, errors)

        fallback_result = self.fallback.parse(statement)
        if fallback_result.ok:
            logger.info("Recovered statement %s with %s parser", index, self.fallback.name)
            return ChainOutcome(fallback_result, errors)

        errors.append(fallback_result.error.at(index) if index is not None else fallback_result.error)
        return ChainOutcome(fallback_result, errors)
