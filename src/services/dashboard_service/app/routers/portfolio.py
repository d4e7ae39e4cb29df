# src/services/dashboard_service/app/routers/portfolio.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ..dtos.portfolio_dto import PortfolioSnapshotResponse
from ..dtos.transaction_dto import HoldingListResponse, HoldingRecord
from ..services.portfolio_controller import PortfolioController, get_portfolio_controller

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/portfolio", tags=["Portfolio"])


@router.get(
    "/holdings",
    response_model=HoldingListResponse,
    summary="List Current Holdings",
)
async def list_holdings(
    controller: PortfolioController = Depends(get_portfolio_controller),
):
    return HoldingListResponse(
        holdings=[HoldingRecord.from_holding(h) for h in controller.holdings]
    )


@router.get(
    "/snapshot",
    response_model=PortfolioSnapshotResponse,
    summary="Value the Portfolio Against Current Quotes",
)
async def get_portfolio_snapshot(
    controller: PortfolioController = Depends(get_portfolio_controller),
):
    """
    Values every holding against the latest available quote and returns the
    portfolio totals, sector allocation, diversification and risk scores.
    Holdings without a quote are valued at their average cost.
    """
    try:
        snapshot, positions = await controller.get_snapshot()
    except Exception:
        logger.exception("An unexpected error occurred while building the portfolio snapshot.")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected server error occurred while valuing the portfolio.",
        )
    return PortfolioSnapshotResponse.from_snapshot(snapshot, positions)
