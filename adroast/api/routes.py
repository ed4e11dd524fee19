from typing import Optional

from fastapi import APIRouter, Depends

from adroast.api.dependencies import get_critique_service, get_report_store, require_report_id
from adroast.domain.schemas.critique import CritiqueRequest, CritiqueResult
from adroast.domain.schemas.report import ReportCreated, ReportRequest, StoredReportPayload
from adroast.services.critique_service import CritiqueService
from adroast.storage.report_store import ReportStore


router = APIRouter()


@router.get("/health")
async def health():
    return {"ok": True}


@router.post("/critique", response_model=CritiqueResult)
async def critique(
    req: Optional[CritiqueRequest] = None,
    service: CritiqueService = Depends(get_critique_service),
):
    return await service.generate(req or CritiqueRequest())


@router.post("/report", response_model=ReportCreated)
async def create_report(req: ReportRequest, store: ReportStore = Depends(get_report_store)):
    report_id = await store.persist(req)
    return ReportCreated(report_id=report_id)


@router.get("/report", response_model=StoredReportPayload)
async def view_report(
    report_id: str = Depends(require_report_id),
    store: ReportStore = Depends(get_report_store),
):
    return await store.retrieve(report_id)
