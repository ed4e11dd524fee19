from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Query

from adroast.config.settings import Settings, get_settings
from adroast.domain.prompts.registry import PromptPackRegistry
from adroast.exceptions.errors import BadRequest, MissingConfiguration
from adroast.llm.provider import get_llm_adapter
from adroast.services.critique_service import CritiqueService
from adroast.storage.notion_client import NotionClient
from adroast.storage.report_store import ReportStore
from adroast.tools.landing_page import LandingPageScraper

logger = logging.getLogger(__name__)


def get_critique_service(settings: Settings = Depends(get_settings)) -> CritiqueService:
    registry = PromptPackRegistry(packs_dir=settings.prompt_packs_dir, default_pack=settings.prompt_pack)
    return CritiqueService(
        adapter=get_llm_adapter(settings),
        scraper=LandingPageScraper(
            timeout=settings.landing_fetch_timeout_seconds,
            max_chars=settings.landing_max_chars,
        ),
        pack=registry.get(),
    )


def get_report_store(settings: Settings = Depends(get_settings)) -> ReportStore:
    if not settings.notion_api_key:
        logger.error("NOTION_API_KEY not configured")
        raise MissingConfiguration()
    client = NotionClient(
        settings.notion_api_key,
        notion_version=settings.notion_version,
        timeout=settings.notion_timeout_seconds,
    )
    return ReportStore(
        client,
        database_id=settings.notion_database_id,
        reports_database_id=settings.reports_database_id,
        report_base_url=settings.report_base_url,
    )


def require_report_id(report_id: Optional[str] = Query(default=None, alias="id")) -> str:
    report_id = (report_id or "").strip()
    if not report_id:
        raise BadRequest("Missing report ID")
    return report_id
