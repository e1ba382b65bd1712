"""
Basanos Rule Parser - Lark-based parser for rule expressions.

Turns a rule expression string into the RuleCondition list consumed by
the declarative rule evaluator.
"""

import json
from typing import Optional

from lark import Lark, Transformer
from lark.exceptions import LarkError, UnexpectedInput

from basanos.constraints.grammar import get_grammar
from basanos.constraints.rules import RuleCondition, RuleOperator
from basanos.exceptions import RuleParseError


_COMPARATORS: dict[str, RuleOperator] = {
    "==": RuleOperator.EQ,
    "!=": RuleOperator.NEQ,
    ">": RuleOperator.GT,
    ">=": RuleOperator.GTE,
    "<": RuleOperator.LT,
    "<=": RuleOperator.LTE,
}


class RuleTransformer(Transformer):
    """
    Lark Transformer that converts a parse tree to RuleConditions.
    """

    # --- Values ---

    def string(self, items):
        s = str(items[0])
        if s.startswith('"'):
            return json.loads(s)
        return s[1:-1]

    def number(self, items):
        s = str(items[0])
        if any(ch in s for ch in ".eE"):
            return float(s)
        return int(s)

    def true_val(self, _):
        return True

    def false_val(self, _):
        return False

    def null_val(self, _):
        return None

    def list(self, items):
        return list(items)

    # --- Conditions ---

    def comparison(self, items):
        field_name, op, value = items
        return RuleCondition(
            field=str(field_name), operator=_COMPARATORS[str(op)], value=value
        )

    def membership(self, items):
        field_name, values = items
        return RuleCondition(field=str(field_name), operator=RuleOperator.IN, value=values)

    def existence(self, items):
        return RuleCondition(field=str(items[0]), operator=RuleOperator.EXISTS)

    def start(self, items):
        return list(items)


class RuleParser:
    """
    Rule expression parser using Lark.

    Example:
        parser = RuleParser()
        conditions = parser.parse('priority in ["P1", "P2"] and reassigned exists')
    """

    def __init__(self):
        self._parser = Lark(
            get_grammar(),
            parser='lalr',
            transformer=RuleTransformer(),
        )

    def parse(self, expression: str) -> list[RuleCondition]:
        """
        Parse a rule expression.

        Args:
            expression: Rule expression text

        Returns:
            Conditions in source order

        Raises:
            RuleParseError: If the expression is empty or malformed
        """
        if not expression or not expression.strip():
            raise RuleParseError("Empty rule expression", expression=expression or "")
        try:
            return self._parser.parse(expression)
        except UnexpectedInput as e:
            raise RuleParseError(
                f"Invalid rule expression at line {e.line}, column {e.column}",
                expression=expression,
                line=e.line,
                column=e.column,
            ) from e
        except LarkError as e:
            raise RuleParseError(
                f"Invalid rule expression: {e}", expression=expression
            ) from e


_default_parser: Optional[RuleParser] = None


def parse_rule(expression: str) -> list[RuleCondition]:
    """
    Convenience function to parse a rule expression.

    Reuses one module-level RuleParser; the parser holds no per-call state.
    """
    global _default_parser
    if _default_parser is None:
        _default_parser = RuleParser()
    return _default_parser.parse(expression)
