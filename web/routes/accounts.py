"""
Accounts 라우트

계정과목표 조회/생성/수정/비활성화 API
"""

from fastapi import APIRouter, Depends, HTTPException

from core.ledger.errors import LedgerError
from core.ledger.service import LedgerService
from web.dependencies import get_ledger_service, ledger_http_exception
from web.models.requests import AccountCreateRequest, AccountUpdateRequest
from web.models.responses import AccountListResponse, AccountResponse

router = APIRouter(prefix="/api/businesses/{business_id}", tags=["Accounts"])


@router.get("/accounts", response_model=AccountListResponse)
async def list_accounts(
    business_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> AccountListResponse:
    """계정 목록 조회 (코드 순)"""
    accounts = await service.list_accounts(business_id)
    return AccountListResponse(
        accounts=[AccountResponse.from_account(a) for a in accounts],
        total=len(accounts),
    )


@router.get("/accounts/{account_id}", response_model=AccountResponse)
async def get_account(
    business_id: str,
    account_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    """계정 단건 조회"""
    account = await service.get_account(business_id, account_id)
    if account is None:
        raise HTTPException(status_code=404, detail=f"Account not found: {account_id}")
    return AccountResponse.from_account(account)


@router.post("/accounts", response_model=AccountResponse, status_code=201)
async def create_account(
    business_id: str,
    request: AccountCreateRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    """계정 생성

    잔액은 0으로 시작하며 분개로만 변경됨.
    """
    try:
        account = await service.create_account(
            business_id=business_id,
            code=request.code,
            name=request.name,
            account_type=request.account_type,
            description=request.description,
        )
    except LedgerError as e:
        raise ledger_http_exception(e) from e

    return AccountResponse.from_account(account)


@router.post("/accounts/seed", response_model=AccountListResponse, status_code=201)
async def seed_accounts(
    business_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> AccountListResponse:
    """기본 계정과목표 생성

    이미 있는 코드는 건너뛰고 새로 생성된 계정만 반환.
    """
    created = await service.seed_chart_of_accounts(business_id)
    return AccountListResponse(
        accounts=[AccountResponse.from_account(a) for a in created],
        total=len(created),
    )


@router.patch("/accounts/{account_id}", response_model=AccountResponse)
async def update_account(
    business_id: str,
    account_id: str,
    request: AccountUpdateRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    """계정 수정

    생략한 항목은 유지. balance 필드를 보내면 422.
    잔액이 있는 계정의 유형 변경은 400, 코드 중복은 409.
    """
    try:
        account = await service.update_account(
            business_id=business_id,
            account_id=account_id,
            code=request.code,
            name=request.name,
            account_type=request.account_type,
            description=request.description,
            is_active=request.is_active,
        )
    except LedgerError as e:
        raise ledger_http_exception(e) from e

    return AccountResponse.from_account(account)


@router.post("/accounts/{account_id}/deactivate", response_model=AccountResponse)
async def deactivate_account(
    business_id: str,
    account_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    """계정 비활성화 (이후 분개에 사용 불가)"""
    try:
        account = await service.deactivate_account(business_id, account_id)
    except LedgerError as e:
        raise ledger_http_exception(e) from e

    return AccountResponse.from_account(account)


@router.delete("/accounts/{account_id}", response_model=AccountResponse)
async def delete_account(
    business_id: str,
    account_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    """계정 삭제 요청

    거래 항목이 계정을 참조할 수 있으므로 행을 지우지 않고 비활성화.
    """
    try:
        account = await service.deactivate_account(business_id, account_id)
    except LedgerError as e:
        raise ledger_http_exception(e) from e

    return AccountResponse.from_account(account)
