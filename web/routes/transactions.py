"""
Transactions 라우트

분개 기록, 수익/비용 기록, 거래 조회/목록, 역분개 API
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from core.ledger.errors import LedgerError
from core.ledger.service import LedgerService, journal_lines_from_dicts
from web.dependencies import get_ledger_service, ledger_http_exception
from web.models.requests import (
    ExpenseCreateRequest,
    IncomeCreateRequest,
    JournalEntryCreateRequest,
    ReverseTransactionRequest,
)
from web.models.responses import TransactionListResponse, TransactionResponse

router = APIRouter(prefix="/api", tags=["Transactions"])


@router.post(
    "/businesses/{business_id}/journal-entries",
    response_model=TransactionResponse,
    status_code=201,
)
async def post_journal_entry(
    business_id: str,
    request: JournalEntryCreateRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """분개 기록

    **검증**:
    - 차변 합계 == 대변 합계
    - 합계 > 0
    - 모든 계정이 business 소속이며 활성
    """
    try:
        transaction = await service.post_journal_entry(
            business_id=business_id,
            transaction_date=request.transaction_date,
            description=request.description,
            reference=request.reference,
            lines=journal_lines_from_dicts([line.model_dump() for line in request.lines]),
            actor_id=request.actor_id,
            transaction_type=request.transaction_type,
        )
    except LedgerError as e:
        raise ledger_http_exception(e) from e

    return TransactionResponse.from_transaction(transaction)


@router.post(
    "/businesses/{business_id}/income",
    response_model=TransactionResponse,
    status_code=201,
)
async def post_income(
    business_id: str,
    request: IncomeCreateRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """수익 기록 (현금 차변 / 수익 대변)"""
    try:
        transaction = await service.post_income(
            business_id=business_id,
            income_account_id=request.income_account_id,
            cash_account_id=request.cash_account_id,
            amount=request.amount,
            transaction_date=request.transaction_date,
            description=request.description,
            reference=request.reference,
            actor_id=request.actor_id,
        )
    except LedgerError as e:
        raise ledger_http_exception(e) from e

    return TransactionResponse.from_transaction(transaction)


@router.post(
    "/businesses/{business_id}/expenses",
    response_model=TransactionResponse,
    status_code=201,
)
async def post_expense(
    business_id: str,
    request: ExpenseCreateRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """비용 기록 (비용 차변 / 현금 대변)"""
    try:
        transaction = await service.post_expense(
            business_id=business_id,
            expense_account_id=request.expense_account_id,
            cash_account_id=request.cash_account_id,
            amount=request.amount,
            transaction_date=request.transaction_date,
            description=request.description,
            reference=request.reference,
            actor_id=request.actor_id,
        )
    except LedgerError as e:
        raise ledger_http_exception(e) from e

    return TransactionResponse.from_transaction(transaction)


@router.get("/businesses/{business_id}/transactions", response_model=TransactionListResponse)
async def list_transactions(
    business_id: str,
    start_date: date | None = Query(default=None, description="시작 거래일 (포함)"),
    end_date: date | None = Query(default=None, description="종료 거래일 (포함)"),
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionListResponse:
    """거래 목록 조회 (분개 번호 순, 항목 포함)"""
    try:
        transactions = await service.list_transactions(business_id, start_date, end_date)
    except LedgerError as e:
        raise ledger_http_exception(e) from e

    return TransactionListResponse(
        transactions=[TransactionResponse.from_transaction(t) for t in transactions],
        total=len(transactions),
    )


@router.get("/transactions/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """거래 단건 조회 (항목 포함)"""
    try:
        transaction = await service.get_transaction(transaction_id)
    except LedgerError as e:
        raise ledger_http_exception(e) from e

    return TransactionResponse.from_transaction(transaction)


@router.post(
    "/transactions/{transaction_id}/reverse",
    response_model=TransactionResponse,
    status_code=201,
)
async def reverse_transaction(
    transaction_id: str,
    request: ReverseTransactionRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """역분개

    원 거래의 차변/대변을 바꾼 새 거래를 기록하고 원 거래를 역분개 처리.
    이미 역분개된 거래는 409.
    """
    try:
        reversal = await service.reverse_transaction(
            transaction_id=transaction_id,
            reason=request.reason,
            actor_id=request.actor_id,
            reversal_date=request.reversal_date,
        )
    except LedgerError as e:
        raise ledger_http_exception(e) from e

    return TransactionResponse.from_transaction(reversal)
