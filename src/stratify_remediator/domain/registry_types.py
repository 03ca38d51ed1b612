from typing import TypedDict


class RuleRegistryEntry(TypedDict, total=False):
    rule_id: str
    display_name: str
    category: str
    severity: str
    short_description: str
    suggested_fix: str
    reference: str
    fixable: bool
    fixer: str
