"""Reconciliation core: turn two snapshots plus a changelog into change sets.

Layered flow of one run:
1) build the alias table from the current snapshot
2) resolve every changelog block name to a canonical id (or diagnostics)
3) segment and parse the blocks into changelog-side change sets
4) diff both snapshots entity by entity
5) merge per entity, structural side authoritative
6) classify the surviving changelog records
"""

from __future__ import annotations

from .aliases import (
    DEFAULT_ALIAS_RULES,
    AliasRules,
    AliasTable,
    ManualAlias,
    build_alias_table,
)
from .classify import canonical_attribute, classify, representative_number, rule_for
from .diff import DEFAULT_EPSILON, diff_entities
from .engine import ReconciliationEngine, reconcile
from .normalize import normalize_name
from .parse import LINE_RULES, ArrowRule, BugFixRule, LineRule, parse_line
from .resolve import IdentityResolver
from .segment import SegmentedLines, group_by_heading, segment_block, segment_lines

__all__ = [
    "DEFAULT_ALIAS_RULES",
    "DEFAULT_EPSILON",
    "LINE_RULES",
    "AliasRules",
    "AliasTable",
    "ArrowRule",
    "BugFixRule",
    "IdentityResolver",
    "LineRule",
    "ManualAlias",
    "ReconciliationEngine",
    "SegmentedLines",
    "build_alias_table",
    "canonical_attribute",
    "classify",
    "diff_entities",
    "group_by_heading",
    "normalize_name",
    "parse_line",
    "reconcile",
    "representative_number",
    "rule_for",
    "segment_block",
    "segment_lines",
]
