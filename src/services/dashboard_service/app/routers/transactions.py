# src/services/dashboard_service/app/routers/transactions.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from portfolio_valuation_engine.exceptions import InsufficientSharesError, UnknownHoldingError

from ..dtos.transaction_dto import (
    HoldingRecord,
    TransactionListResponse,
    TransactionRecord,
    TransactionRequest,
    TransactionResponse,
)
from ..services.portfolio_controller import (
    ExecutionPriceUnavailableError,
    PortfolioController,
    get_portfolio_controller,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.post(
    "",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a Buy or Sell",
)
async def submit_transaction(
    request: TransactionRequest,
    controller: PortfolioController = Depends(get_portfolio_controller),
):
    """
    Applies a buy or sell to the holdings and appends it to the ledger.
    Rejected transactions leave both holdings and ledger unchanged.
    """
    try:
        txn, holding = await controller.submit_transaction(
            symbol=request.symbol,
            direction=request.direction,
            shares=request.shares,
            price=request.price,
            timestamp=request.timestamp,
        )
    except UnknownHoldingError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except InsufficientSharesError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except ExecutionPriceUnavailableError as e:
        raise HTTPException(status_code=422, detail=e.message)

    return TransactionResponse(
        transaction=TransactionRecord.from_transaction(txn),
        holding=HoldingRecord.from_holding(holding) if holding else None,
    )


@router.get(
    "",
    response_model=TransactionListResponse,
    summary="List the Transaction Ledger",
)
async def list_transactions(
    controller: PortfolioController = Depends(get_portfolio_controller),
):
    return TransactionListResponse(
        transactions=[TransactionRecord.from_transaction(t) for t in controller.transactions]
    )
