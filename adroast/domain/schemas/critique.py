from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Platform(str, Enum):
    meta = "meta"
    linkedin = "linkedin"
    google = "google"
    twitter = "twitter"


class CritiqueRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")
    platform: Optional[Platform] = None
    offer_type: Optional[str] = None
    icp_description: Optional[str] = None
    landing_url: Optional[str] = None
    ad_copy: Optional[str] = None
    visual_description: Optional[str] = None
    has_image: Optional[bool] = None
    landing_copy: Optional[str] = None


class GenerationMeta(BaseModel):
    """Diagnostics attached to a generated critique as `_meta`."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")
    has_ad_copy: bool = False
    ad_copy_length: int = 0
    has_landing_url: bool = False
    has_landing_copy: bool = False
    landing_copy_length: int = 0
    landing_scraped: bool = False
    landing_scrape_error: Optional[str] = None
    has_any_landing_content: bool = False
    run_id: str = "unknown"
    llm_provider: str = ""
    model: str = ""
    generated_at: str = ""


class IssueAssessment(BaseModel):
    model_config = ConfigDict(extra="ignore")
    category: str = ""
    title: str = ""
    score: int = Field(default=5, ge=1, le=10)
    explanation: str = ""


class LandingPageRoast(BaseModel):
    model_config = ConfigDict(extra="ignore")
    overall_score: int = Field(default=0, ge=0, le=10)
    headline_score: int = Field(default=0, ge=0, le=10)
    headline_feedback: str = ""
    value_prop_score: int = Field(default=0, ge=0, le=10)
    value_prop_feedback: str = ""
    cta_score: int = Field(default=0, ge=0, le=10)
    cta_feedback: str = ""
    trust_score: int = Field(default=0, ge=0, le=10)
    trust_feedback: str = ""
    top_issues: List[str] = Field(default_factory=list)
    quick_wins: List[str] = Field(default_factory=list)


class Disconnect(BaseModel):
    model_config = ConfigDict(extra="ignore")
    problem: str = ""
    fix: str = ""


class AdLandingMismatch(BaseModel):
    model_config = ConfigDict(extra="ignore")
    alignment_score: int = Field(default=0, ge=0, le=10)
    verdict: str = ""
    disconnects: List[Disconnect] = Field(default_factory=list)
    message_match_issues: str = ""


class FixKit(BaseModel):
    model_config = ConfigDict(extra="ignore")
    headlines: List[str] = Field(default_factory=list)
    body: str = ""
    ctas: List[str] = Field(default_factory=list)
    landing_page_headline: str = ""
    landing_page_subhead: str = ""
    rationale: str = ""


class Experiment(BaseModel):
    model_config = ConfigDict(extra="ignore")
    title: str = ""
    description: str = ""


class CritiqueResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")
    icp_mismatch: str = ""
    overall_score: int = Field(default=5, ge=1, le=10)
    issues: List[IssueAssessment] = Field(default_factory=list)
    landing_page_roast: LandingPageRoast = Field(default_factory=LandingPageRoast)
    ad_landing_mismatch: AdLandingMismatch = Field(default_factory=AdLandingMismatch)
    fix_kit: FixKit = Field(default_factory=FixKit)
    experiments: List[Experiment] = Field(default_factory=list)
    next_steps: List[str] = Field(default_factory=list)
    meta: Optional[GenerationMeta] = Field(default=None, alias="_meta")
    version: Optional[str] = Field(default=None, alias="_version")
