from __future__ import annotations

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

ScoreValue = Union[float, str, None]


class ReportRequest(BaseModel):
    """Lead contact details plus the critique the client wants stored.

    `roast_data` is kept as the client sent it; it is stored, not re-validated.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")
    email: Optional[str] = None
    linkedin: Optional[str] = None
    platform: Optional[str] = None
    ad_score: ScoreValue = None
    lp_score: ScoreValue = None
    match_score: ScoreValue = None
    roast_data: Optional[Dict[str, Any]] = None
    icp: Optional[str] = None


class ReportCreated(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
    success: bool = True
    report_id: str


class StoredReportPayload(BaseModel):
    """The JSON document kept in a report's code fragments, returned as stored."""

    model_config = ConfigDict(extra="allow")
    result: Any = None
    icp: Any = None
    platform: Any = None
