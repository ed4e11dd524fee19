"""
Report storage module.

Notion-backed persistence and lookup of generated critiques, plus the
fragment format shared by both directions.
"""

from adroast.storage.fragments import (
    FRAGMENT_SIZE,
    fragment_blocks,
    join_code_fragments,
    serialize_payload,
    split_fragments,
)
from adroast.storage.ids import generate_report_id
from adroast.storage.notion_client import NotionClient
from adroast.storage.report_store import ReportStore

__all__ = [
    "FRAGMENT_SIZE",
    "NotionClient",
    "ReportStore",
    "fragment_blocks",
    "generate_report_id",
    "join_code_fragments",
    "serialize_payload",
    "split_fragments",
]
