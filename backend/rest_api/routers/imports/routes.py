"""
CSV import endpoints.
"""

from fastapi import APIRouter, Depends, Query, Response

from rest_api.core.context import require_identity
from rest_api.services.imports import DryRunResult, dry_run, get_template, render_template
from shared.security.auth import SessionIdentity
from shared.utils.exceptions import ValidationError
from shared.utils.schemas import ErrorResponse, ImportPreviewRequest

router = APIRouter(prefix="/api/import", tags=["import"])


@router.get("/template", responses={400: {"model": ErrorResponse}})
def download_template(type: str = Query("receipts")) -> Response:
    """CSV with the template's column keys and one example row."""
    template = get_template(type)
    if template is None:
        raise ValidationError("Unknown type", import_type=type)

    return Response(
        content=render_template(template),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{template.filename}"',
            "Cache-Control": "no-store",
        },
    )


@router.post(
    "/preview",
    response_model=DryRunResult,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
def preview_import(
    body: ImportPreviewRequest,
    identity: SessionIdentity = Depends(require_identity),
) -> DryRunResult:
    """Validate an uploaded CSV against its template without saving."""
    template = get_template(body.type)
    if template is None:
        raise ValidationError("Unknown type", import_type=body.type)
    return dry_run(template, body.csv)
