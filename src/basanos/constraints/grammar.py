"""
Basanos Rule Grammar - Lark EBNF grammar for rule expressions.

A rule expression is a compact text form of a declarative condition list:

    change_freeze_active == true
    priority in ["P1", "P2"] and reassignment_count >= 3
    sla_breached exists

Conditions are joined with "and" (or "&&"); there is no "or" because the
conditions of a rule are always ANDed. Keywords only match as whole words,
so "a == 1 andy == 2" is an error rather than "a == 1 and y == 2".
"""

RULE_GRAMMAR = r'''
start: condition (_AND condition)*

condition: FIELD COMPARATOR value     -> comparison
         | FIELD _IN list             -> membership
         | FIELD _EXISTS              -> existence

?value: STRING -> string
      | NUMBER -> number
      | "true"i -> true_val
      | "false"i -> false_val
      | "null"i -> null_val
      | list

list: "[" "]"
    | "[" value ("," value)* "]"

_AND: /and\b/i | "&&"
_IN: /in\b/i
_EXISTS: /exists\b/i

COMPARATOR: "==" | "!=" | ">=" | "<=" | ">" | "<"

// Terminals
FIELD: /[a-zA-Z_][a-zA-Z0-9_.\-]*/
NUMBER: /-?[0-9]+(\.[0-9]+)?([eE][+-]?[0-9]+)?/
STRING: /"(?:[^"\\]|\\.)*"/ | /'[^']*'/

%import common.WS
%ignore WS
'''


def get_grammar() -> str:
    """Return the rule expression grammar string for use with Lark."""
    return RULE_GRAMMAR
