"""
Exports Router - Science Fair Evaluation Platform
fairscore/routers/exports.py
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from fairscore.core.dependencies import get_export_service, require_admin
from fairscore.services.export_service import ExportService

router = APIRouter(prefix="/api/v1/exports", tags=["Exports"], dependencies=[Depends(require_admin)])


def _csv_response(body: str, filename: str) -> Response:
    return Response(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/results.csv", summary="Results table as CSV")
async def export_results_csv(service: ExportService = Depends(get_export_service)) -> Response:
    return _csv_response(service.results_csv(), "results.csv")


@router.get("/project_scores.csv", summary="Project score sheet as CSV")
async def export_project_scores_csv(service: ExportService = Depends(get_export_service)) -> Response:
    return _csv_response(service.project_scores_csv(), "project_scores.csv")


@router.get("/data.json", summary="Full dataset as JSON")
async def export_json(service: ExportService = Depends(get_export_service)) -> JSONResponse:
    return JSONResponse(
        content=service.json_dump(),
        headers={"Content-Disposition": 'attachment; filename="data.json"'},
    )
