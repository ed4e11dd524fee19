from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict

from langchain_core.prompts import ChatPromptTemplate
from langchain_core.runnables import Runnable

from adroast.core.context import current_run_id
from adroast.core.helpers import extract_json_object
from adroast.domain.critique.normalize import normalize_critique
from adroast.domain.prompts.registry import PromptPack
from adroast.domain.schemas.critique import CritiqueRequest, CritiqueResult, GenerationMeta
from adroast.exceptions.errors import AppError, NoStructuredOutput
from adroast.llm.base import LLMAdapter
from adroast.llm.invoke import invoke_chain
from adroast.tools.landing_page import LandingPageScraper, LandingScrape

logger = logging.getLogger(__name__)

NOT_PROVIDED = "Not provided"


@dataclass(frozen=True)
class CritiqueInputs:
    platform: str
    offer_type: str
    icp_description: str
    landing_url: str
    ad_copy: str
    visual_description: str
    landing_copy: str

    @classmethod
    def from_request(cls, req: CritiqueRequest) -> "CritiqueInputs":
        return cls(
            platform=req.platform.value if req.platform else "",
            offer_type=(req.offer_type or "").strip(),
            icp_description=(req.icp_description or "").strip(),
            landing_url=(req.landing_url or "").strip(),
            ad_copy=(req.ad_copy or "").strip(),
            visual_description=(req.visual_description or "").strip(),
            landing_copy=(req.landing_copy or "").strip(),
        )


def build_prompt_payload(inputs: CritiqueInputs, scraped_content: str, has_landing_content: bool) -> Dict[str, Any]:
    """Template variables for the critique user prompt."""
    if has_landing_content:
        content_status = "YES - SCORE IT 1-10"
        score_instruction = (
            "LANDING PAGE CONTENT IS AVAILABLE ABOVE. You MUST provide real scores (1-10) "
            "for landing_page_roast and ad_landing_mismatch. Do NOT use 0."
        )
    else:
        content_status = "NO - SCORE IT 0"
        score_instruction = (
            "NO LANDING PAGE CONTENT AVAILABLE. Set all landing_page_roast scores to 0 "
            "and ad_landing_mismatch alignment_score to 0."
        )

    return {
        "landing_subject": " AND its landing page" if has_landing_content else "",
        "icp_description": inputs.icp_description or "Not specified",
        "platform": inputs.platform or "Not specified",
        "offer_type": inputs.offer_type or "Not specified",
        "landing_url": inputs.landing_url or NOT_PROVIDED,
        "content_status": content_status,
        "ad_copy_section": "=== AD COPY ===\n" + (inputs.ad_copy or "[No ad copy provided]"),
        "visual_section": (
            f"=== AD VISUAL DESCRIPTION ===\n{inputs.visual_description}" if inputs.visual_description else ""
        ),
        "scraped_section": (
            f"=== LANDING PAGE CONTENT (AUTO-SCRAPED FROM URL) ===\n{scraped_content}" if scraped_content else ""
        ),
        "landing_copy_section": (
            f"=== LANDING PAGE CONTENT (USER-PROVIDED) ===\n{inputs.landing_copy}" if inputs.landing_copy else ""
        ),
        "score_instruction": score_instruction,
        "required_score_hint": "1-10 REQUIRED - NOT 0" if has_landing_content else "0",
        "score_hint": "1-10" if has_landing_content else "0",
    }


class CritiqueService:
    """
    Ad critique generation.

    - optional landing page scrape (failures degrade to "no landing content")
    - prompt pack -> chain -> free-text model reply
    - JSON extraction + fallback normalization of the reply
    """

    def __init__(self, *, adapter: LLMAdapter, scraper: LandingPageScraper, pack: PromptPack) -> None:
        self.adapter = adapter
        self.scraper = scraper
        self.pack = pack

    def build_chain(self) -> Runnable:
        prompt = ChatPromptTemplate.from_messages(
            [
                ("system", self.pack.critique_system),
                ("human", self.pack.critique_user),
            ]
        )
        return prompt | self.adapter.as_chat_model()

    async def generate(self, req: CritiqueRequest) -> CritiqueResult:
        inputs = CritiqueInputs.from_request(req)
        meta = GenerationMeta(
            has_ad_copy=bool(inputs.ad_copy),
            ad_copy_length=len(inputs.ad_copy),
            has_landing_url=bool(inputs.landing_url),
            has_landing_copy=bool(inputs.landing_copy),
            landing_copy_length=len(inputs.landing_copy),
            run_id=current_run_id(),
            llm_provider=self.adapter.provider,
            model=self.adapter.model_name,
        )
        logger.info(
            "CRITIQUE_START platform=%s ad_copy_len=%d landing_url=%s landing_copy_len=%d",
            inputs.platform or "-",
            meta.ad_copy_length,
            inputs.landing_url or "none",
            meta.landing_copy_length,
        )

        # 1) landing page
        scrape = LandingScrape()
        if inputs.landing_url:
            scrape = await self.scraper.scrape(inputs.landing_url)
            meta.landing_scraped = scrape.scraped
            meta.landing_scrape_error = scrape.error

        has_landing_content = bool(scrape.content or inputs.landing_copy)
        meta.has_any_landing_content = has_landing_content

        # 2) invoke
        payload = build_prompt_payload(inputs, scrape.content, has_landing_content)
        try:
            msg = await invoke_chain(self.build_chain(), payload)
        except AppError as e:
            e.meta = meta.model_dump(by_alias=True)
            raise
        content = msg.content if isinstance(msg.content, str) else str(msg.content)

        # 3) extract + normalize
        parsed = extract_json_object(content)
        if parsed is None:
            logger.warning("CRITIQUE_NO_JSON reply_chars=%d", len(content))
            raise NoStructuredOutput(meta=meta.model_dump(by_alias=True))

        doc = normalize_critique(parsed, has_landing_content=has_landing_content)
        result = CritiqueResult.model_validate(doc)

        meta.generated_at = datetime.now(timezone.utc).isoformat()
        result.meta = meta
        result.version = str(self.pack.params.get("api_version", "v4"))

        logger.info(
            "CRITIQUE_DONE has_landing_content=%s landing_scraped=%s ad_score=%s lp_score=%s match_score=%s",
            has_landing_content,
            meta.landing_scraped,
            result.overall_score,
            result.landing_page_roast.overall_score,
            result.ad_landing_mismatch.alignment_score,
        )
        return result
