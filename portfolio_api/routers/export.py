"""
Portfolio export endpoints.

GET /api/export/portfolio  — the portfolio record as JSON (what the export page previews)
GET /api/export/{format}   — markdown | json | html | print, served as a download
"""
import logging

from fastapi import APIRouter
from fastapi.responses import Response

from portfolio_api.models.schemas import PortfolioResponse
from portfolio_api.services.exporter import ExportFormat, render_export
from portfolio_api.services.portfolio_data import get_portfolio

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/portfolio", response_model=PortfolioResponse)
async def get_portfolio_record() -> PortfolioResponse:
    return PortfolioResponse.model_validate(get_portfolio().to_dict())


@router.get("/{export_format}")
async def export_portfolio(export_format: ExportFormat) -> Response:
    """
    Render the portfolio and offer it as ``portfolio-<slug>.<ext>``.

    ``print`` returns the HTML document inline so the browser opens it and
    shows the print dialog (save as PDF from there).
    """
    export = render_export(get_portfolio(), export_format)
    disposition = "inline" if export_format is ExportFormat.PRINT else "attachment"
    logger.info("Exporting portfolio as %s", export.filename)
    return Response(
        content=export.body,
        media_type=f"{export.media_type}; charset=utf-8",
        headers={"Content-Disposition": f'{disposition}; filename="{export.filename}"'},
    )
