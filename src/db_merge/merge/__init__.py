"""Merge planning and primary key remapping.

Usage:
    from db_merge.merge import MergePlanner, PrimaryKeyRemapper
"""

from db_merge.merge.models import MergePlan, MigrationStatement
from db_merge.merge.planner import MergePlanner, plan_merge
from db_merge.merge.remapper import PrimaryKeyRemapper

__all__ = [
    "MergePlan",
    "MigrationStatement",
    "MergePlanner",
    "plan_merge",
    "PrimaryKeyRemapper",
]
