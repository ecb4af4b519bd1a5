"""Report moderation endpoints."""

from fastapi import APIRouter, Query, Response, status

from myriad_api.enums import ReportStatus
from myriad_api.models import Report
from myriad_api.repositories import ReportRepository
from myriad_api.schemas.report import ReportResponse, ReportUpdate

from ..dependencies import CreateInterceptorDep, CurrentUserDep, ServicesDep, SessionDep

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("", response_model=list[ReportResponse])
async def list_reports(
    current_user: CurrentUserDep,
    db: SessionDep,
    report_status: ReportStatus | None = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> list[Report]:
    """List reports, most reported first."""
    where = {"status": report_status.value} if report_status else {}
    return ReportRepository(db).find(
        order_by=Report.total_reported.desc(), limit=limit, offset=offset, **where
    )


@router.get("/{report_id}", response_model=ReportResponse)
async def get_report(report_id: str, current_user: CurrentUserDep, db: SessionDep) -> Report:
    return ReportRepository(db).find_by_id(report_id)


@router.patch("/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_report(
    report_id: str,
    payload: ReportUpdate,
    current_user: CurrentUserDep,
    services: ServicesDep,
    interceptor: CreateInterceptorDep,
    db: SessionDep,
) -> Response:
    """Resolve a report and tell the owner and the reporters the outcome."""
    services.reports.update_status(report_id, payload.status)
    db.commit()

    interceptor.fan_out(
        "report-owner", lambda s: s.notifications.send_report_response_to_user(report_id)
    )
    interceptor.fan_out(
        "report-reporters",
        lambda s: s.notifications.send_report_response_to_reporters(report_id),
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
async def restore_report(
    report_id: str, current_user: CurrentUserDep, services: ServicesDep, db: SessionDep
) -> Response:
    """Drop a report and restore whatever it removed."""
    services.reports.restore(report_id)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
