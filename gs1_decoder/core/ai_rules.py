"""
AI Rule Table for the GS1 scan decoder.

Holds the Application Identifiers recognised at the point of sale and
during stock intake, together with their length class and value type.
The table is parsed once at import time from an embedded text table and
exposed read-only; lookups go through a trie so that a longer AI (400)
is always tried before a shorter one sharing its prefix (40).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple


class ValueType(str, Enum):
    """How the value of an AI is normalised."""
    STRING = "string"
    DATE = "date"
    DATETIME = "datetime"
    NUMBER = "number"
    WEIGHT = "weight"


@dataclass(frozen=True)
class AIRule:
    """
    A single Application Identifier rule.

    Attributes:
        code: The AI code (2-4 digits)
        label: Human-readable label
        fixed_length: Exact data length for fixed-length AIs, None if variable
        max_length: Maximum data length (equals fixed_length for fixed AIs)
        value_type: How the value is normalised
        decimal_places: Implied decimal places (weight AIs only)
        unit: Unit appended to a decoded weight
    """
    code: str
    label: str
    fixed_length: Optional[int]
    max_length: int
    value_type: ValueType = ValueType.STRING
    decimal_places: Optional[int] = None
    unit: Optional[str] = None

    @property
    def is_fixed(self) -> bool:
        return self.fixed_length is not None


class TrieNode:
    """Trie node for AI prefix matching."""
    __slots__ = ['children', 'rule']

    def __init__(self):
        self.children: Dict[str, TrieNode] = {}
        self.rule: Optional[AIRule] = None


class AITrie:
    """
    Digit trie over AI codes.

    Unlike a plain longest-match lookup, ``find_matches`` yields every
    AI that prefixes the text at a position, longest first, so a caller
    can fall back to a shorter AI when the longer one cannot take a value.
    """

    MAX_AI_LENGTH = 4

    def __init__(self):
        self.root = TrieNode()

    def insert(self, rule: AIRule) -> None:
        node = self.root
        for char in rule.code:
            node = node.children.setdefault(char, TrieNode())
        node.rule = rule

    def find_matches(self, text: str, start: int = 0) -> List[AIRule]:
        """Return all AI rules whose code starts at ``start``, longest first."""
        node = self.root
        matches: List[AIRule] = []
        for char in text[start:start + self.MAX_AI_LENGTH]:
            node = node.children.get(char)
            if node is None:
                break
            if node.rule is not None:
                matches.append(node.rule)
        matches.reverse()
        return matches


# Embedded rule table.
# Format column: N<n>/X<n> fixed length, N..<n>/X..<n> variable up to n.
# A trailing 'n' on the AI expands to the AI family <base>0-<base>5 with
# the final digit giving the implied decimal places.
RAW_AI_RULES = """
# AI    Format   Type          Label
00      N18      string        SSCC (Serial Shipping Container Code)
01      N14      string        GTIN (Global Trade Item Number)
02      N14      string        GTIN of Content
10      X..20    string        Batch/Lot Number
11      N6       date          Production Date (YYMMDD)
12      N6       date          Due Date
13      N6       date          Packaging Date
15      N6       date          Best Before Date
17      N6       date          Expiration Date (YYMMDD)
20      N2       string        Internal Variant
21      X..20    string        Serial Number
30      N..8     number        Variable Count
37      N..8     number        Count of Items
240     X..30    string        Additional Product ID
241     X..30    string        Customer Part Number
250     X..30    string        Secondary Serial Number
310n    N6       weight:kg     Net Weight (kg)
320n    N6       weight:lb     Net Weight (lb)
400     X..30    string        Customer Purchase Order
410     N13      string        Ship To - Deliver To GLN
420     X..20    string        Ship To Postal Code
710     X..20    string        NHRN (National Healthcare Reimbursement No)
711     X..20    string        NHRN Discount
712     X..20    string        NHRN Region
713     X..20    string        NHRN Tax
7003    N10      datetime      Expiration Time
8003    X..30    string        GRAI (Global Returnable Asset Identifier)
8006    N18      string        ITIP (Component/Part)
8010    X..30    string        CPID (Component/Part Identifier)
"""

# Decimal-place variants generated for each 'n' family
WEIGHT_DECIMAL_RANGE = range(6)


def _parse_length_spec(spec: str) -> Tuple[Optional[int], int]:
    """
    Parse a length specification.

    Examples:
        "N14"   -> (14, 14)
        "X..20" -> (None, 20)
    """
    len_spec = spec[1:]
    if len_spec.startswith('..'):
        return None, int(len_spec[2:])
    length = int(len_spec)
    return length, length


def _parse_type_spec(spec: str) -> Tuple[ValueType, Optional[str]]:
    """Split a type column such as 'weight:kg' into (ValueType, unit)."""
    type_name, _, unit = spec.partition(':')
    return ValueType(type_name), (unit or None)


def _parse_raw_rules(raw: str = RAW_AI_RULES) -> Dict[str, AIRule]:
    """Parse the raw rule table text into AIRule objects."""
    rules: Dict[str, AIRule] = {}

    for line in raw.strip().split('\n'):
        line = line.strip()
        if not line or line.startswith('#'):
            continue

        ai_spec, length_spec, type_spec, label = line.split(None, 3)
        fixed_length, max_length = _parse_length_spec(length_spec)
        value_type, unit = _parse_type_spec(type_spec)

        if ai_spec.endswith('n'):
            base = ai_spec[:-1]
            for places in WEIGHT_DECIMAL_RANGE:
                code = f"{base}{places}"
                rules[code] = AIRule(
                    code=code,
                    label=label,
                    fixed_length=fixed_length,
                    max_length=max_length,
                    value_type=value_type,
                    decimal_places=places,
                    unit=unit,
                )
        else:
            rules[ai_spec] = AIRule(
                code=ai_spec,
                label=label,
                fixed_length=fixed_length,
                max_length=max_length,
                value_type=value_type,
                unit=unit,
            )

    return rules


class AIRuleTable:
    """
    Read-only AI rule table with trie-based prefix matching.

    Built once at import and shared by every decode call.
    """

    def __init__(self, rules: Mapping[str, AIRule]):
        self._rules: Mapping[str, AIRule] = MappingProxyType(dict(rules))
        self._trie = AITrie()
        for rule in self._rules.values():
            self._trie.insert(rule)

    def get(self, code: str) -> Optional[AIRule]:
        """Get a rule by exact AI code."""
        return self._rules.get(code)

    def find_matches(self, text: str, start: int = 0) -> List[AIRule]:
        """All rules whose code prefixes ``text[start:]``, longest code first."""
        return self._trie.find_matches(text, start)

    def codes_longest_first(self) -> List[str]:
        """All AI codes sorted by descending length, table order within a length."""
        return sorted(self._rules, key=len, reverse=True)

    @property
    def rules(self) -> Mapping[str, AIRule]:
        return self._rules

    def __contains__(self, code: object) -> bool:
        return code in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)


AI_RULES = AIRuleTable(_parse_raw_rules())


def get_rule_table() -> AIRuleTable:
    """Return the shared, immutable AI rule table."""
    return AI_RULES
