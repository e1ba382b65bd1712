# -*- encoding: utf-8 -*-
"""
Basanos Exceptions.

Errors raised at the authoring boundary, when rule definitions or rule
expressions are turned into constraints. The engines themselves never
raise for lookup misses or failing constraints; see the module docs of
basanos.ontology.engine and basanos.constraints.engine.
"""

from typing import Optional


class BasanosError(Exception):
    """Base exception for all Basanos errors."""
    pass


class RuleParseError(BasanosError):
    """
    Raised when a rule expression cannot be parsed.

    Attributes:
        expression: The expression text that failed
        line: 1-based line of the failure, if known
        column: 1-based column of the failure, if known

    Usage:
        try:
            conditions = parse_rule("priority ==")
        except RuleParseError as e:
            print(f"Bad rule at column {e.column}: {e}")
    """

    def __init__(
        self,
        message: str,
        expression: str = "",
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        super().__init__(message)
        self.expression = expression
        self.line = line
        self.column = column

    def to_dict(self) -> dict:
        """Convert exception to dictionary representation."""
        return {
            "error": "RuleParseError",
            "message": str(self),
            "expression": self.expression,
            "line": self.line,
            "column": self.column,
        }


class RuleDefinitionError(BasanosError):
    """
    Raised when a declarative constraint definition is malformed.

    Attributes:
        constraint_id: Id of the offending definition ("" if it has none)
        field: The key that was missing or invalid
    """

    def __init__(self, message: str, constraint_id: str = "", field: str = ""):
        super().__init__(message)
        self.constraint_id = constraint_id
        self.field = field

    def to_dict(self) -> dict:
        """Convert exception to dictionary representation."""
        return {
            "error": "RuleDefinitionError",
            "message": str(self),
            "constraint_id": self.constraint_id,
            "field": self.field,
        }
