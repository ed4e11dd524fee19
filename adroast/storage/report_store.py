from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Protocol

from adroast.domain.schemas.report import ReportRequest, StoredReportPayload
from adroast.exceptions.errors import CorruptReport, NotFound
from adroast.storage.fragments import (
    clip_text,
    fragment_blocks,
    join_code_fragments,
    rich_text,
    serialize_payload,
)
from adroast.storage.ids import generate_report_id

logger = logging.getLogger(__name__)

# Notion caps both the children of a single request and rich-text content
MAX_BLOCKS_PER_REQUEST = 100
MAX_TEXT_CHARS = 2000

NOT_AVAILABLE = "N/A"

PLATFORM_LABELS = {
    "meta": "Meta",
    "linkedin": "LinkedIn",
    "google": "Google",
    "twitter": "X/Twitter",
}

SCORE_PROPERTIES = (
    ("Ad Score", "ad_score"),
    ("LP Score", "lp_score"),
    ("Match Score", "match_score"),
)


class ReportBackend(Protocol):
    async def create_page(self, database_id: str, properties: Dict[str, Any], children: List[Dict[str, Any]]) -> Dict[str, Any]: ...

    async def append_block_children(self, block_id: str, children: List[Dict[str, Any]]) -> Dict[str, Any]: ...

    async def query_database(self, database_id: str, filter: Dict[str, Any]) -> List[Dict[str, Any]]: ...

    async def list_block_children(self, block_id: str) -> List[Dict[str, Any]]: ...


def linkedin_username(linkedin: Optional[str]) -> str:
    if not linkedin or "/in/" not in linkedin:
        return "Unknown"
    name = linkedin.split("/in/", 1)[1]
    name = name[:-1] if name.endswith("/") else name
    return name or "Unknown"


def parse_score(value: Any) -> Optional[float]:
    """Numeric score, or None for missing / 'N/A' / unparseable values."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if not text or text == NOT_AVAILABLE:
        return None
    try:
        return float(text)
    except ValueError:
        logger.warning("REPORT_SCORE_IGNORED value=%r", value)
        return None


def build_properties(req: ReportRequest, report_id: str, report_link: str, today: str) -> Dict[str, Any]:
    properties: Dict[str, Any] = {
        "Lead": {"title": rich_text(linkedin_username(req.linkedin))},
        "Report ID": {"rich_text": rich_text(report_id)},
        "Report Link": {"url": report_link},
        "Date": {"date": {"start": today}},
    }
    if req.email:
        properties["Email"] = {"email": req.email}
    if req.linkedin:
        url = req.linkedin if req.linkedin.startswith("http") else f"https://{req.linkedin}"
        properties["LinkedIn"] = {"url": url}
    if req.platform in PLATFORM_LABELS:
        properties["Platform"] = {"select": {"name": PLATFORM_LABELS[req.platform]}}
    for name, field in SCORE_PROPERTIES:
        score = parse_score(getattr(req, field))
        if score is not None:
            properties[name] = {"number": score}
    return properties


def _clip(text: str) -> str:
    return clip_text(text, MAX_TEXT_CHARS)


def _heading(text: str) -> Dict[str, Any]:
    return {"object": "block", "type": "heading_2", "heading_2": {"rich_text": rich_text(_clip(text))}}


def _paragraph(text: str) -> Dict[str, Any]:
    return {"object": "block", "type": "paragraph", "paragraph": {"rich_text": rich_text(_clip(text))}}


def _bullet(text: str) -> Dict[str, Any]:
    return {
        "object": "block",
        "type": "bulleted_list_item",
        "bulleted_list_item": {"rich_text": rich_text(_clip(text))},
    }


def _score_label(score: Any) -> str:
    return f"{score}/10" if score else f"{NOT_AVAILABLE}/10"


def _section(doc: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = doc.get(key)
    return value if isinstance(value, Mapping) else {}


def _lines(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item]


def render_readable_blocks(result: Mapping[str, Any], icp: Optional[str]) -> List[Dict[str, Any]]:
    """Human-readable summary shown under the JSON fragments in Notion.

    `result` is whatever the client posted, so every field may be missing.
    """
    fix_kit = _section(result, "fix_kit")
    headlines = _lines(fix_kit.get("headlines"))
    ctas = _lines(fix_kit.get("ctas"))
    blocks = [
        _heading("🎯 Target Audience"),
        _paragraph(icp or "Not specified"),
        _heading("🔥 Ad Verdict"),
        _paragraph(str(result.get("icp_mismatch") or NOT_AVAILABLE)),
        _heading("📊 Scores"),
        _bullet(f"Ad Score: {_score_label(result.get('overall_score'))}"),
        _bullet(f"Landing Page: {_score_label(_section(result, 'landing_page_roast').get('overall_score'))}"),
        _bullet(f"Ad-LP Match: {_score_label(_section(result, 'ad_landing_mismatch').get('alignment_score'))}"),
    ]
    if headlines:
        blocks.append(_heading("✏️ Suggested Headlines"))
        blocks.extend(_bullet(h) for h in headlines)
    if ctas:
        blocks.append(_heading("🔘 Suggested CTAs"))
        blocks.extend(_bullet(c) for c in ctas)
    return blocks


def build_report_blocks(req: ReportRequest) -> List[Dict[str, Any]]:
    payload = {"result": req.roast_data, "icp": req.icp, "platform": req.platform}
    blocks = fragment_blocks(serialize_payload(payload))
    blocks.append({"object": "block", "type": "divider", "divider": {}})
    if req.roast_data is not None:
        blocks.extend(render_readable_blocks(req.roast_data, req.icp))
    return blocks


class ReportStore:
    """
    Lead reports in a Notion database.

    persist: one page per report (properties + JSON fragments + readable summary)
    retrieve: exact match on the `Report ID` property, JSON rebuilt from fragments
    """

    def __init__(
        self,
        backend: ReportBackend,
        *,
        database_id: str,
        reports_database_id: Optional[str] = None,
        report_base_url: str = "",
    ):
        self.backend = backend
        self.database_id = database_id
        self.reports_database_id = reports_database_id or database_id
        self.report_base_url = report_base_url

    def report_link(self, report_id: str) -> str:
        return f"{self.report_base_url}?id={report_id}"

    async def persist(self, req: ReportRequest) -> str:
        report_id = generate_report_id()
        today = datetime.now(timezone.utc).date().isoformat()
        properties = build_properties(req, report_id, self.report_link(report_id), today)
        blocks = build_report_blocks(req)

        logger.info(
            "REPORT_SAVE report_id=%s lead=%s blocks=%d",
            report_id,
            properties["Lead"]["title"][0]["text"]["content"],
            len(blocks),
        )
        page = await self.backend.create_page(
            self.database_id, properties, blocks[:MAX_BLOCKS_PER_REQUEST]
        )
        for start in range(MAX_BLOCKS_PER_REQUEST, len(blocks), MAX_BLOCKS_PER_REQUEST):
            await self.backend.append_block_children(page["id"], blocks[start : start + MAX_BLOCKS_PER_REQUEST])

        logger.info("REPORT_SAVED report_id=%s page_id=%s", report_id, page.get("id"))
        return report_id

    async def retrieve(self, report_id: str) -> StoredReportPayload:
        pages = await self.backend.query_database(
            self.reports_database_id,
            {"property": "Report ID", "rich_text": {"equals": report_id}},
        )
        if not pages:
            raise NotFound("Report not found")

        blocks = await self.backend.list_block_children(pages[0]["id"])
        raw = join_code_fragments(blocks)
        if not raw:
            raise NotFound("Roast data not found")

        try:
            doc = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("REPORT_CORRUPT report_id=%s chars=%d error=%s", report_id, len(raw), e)
            raise CorruptReport() from e
        if not isinstance(doc, dict):
            logger.error("REPORT_CORRUPT report_id=%s type=%s", report_id, type(doc).__name__)
            raise CorruptReport()
        return StoredReportPayload.model_validate(doc)
