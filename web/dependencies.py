"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
"""

from typing import AsyncGenerator

from fastapi import Depends, HTTPException

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings, get_settings
from core.ledger.errors import (
    AccountNotFoundError,
    AlreadyReversedError,
    DuplicateAccountCodeError,
    LedgerError,
    TransactionNotFoundError,
)
from core.ledger.service import LedgerService
from core.ledger.store import LedgerStore


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


async def get_db_write(
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[SQLiteAdapter, None]:
    """DB 세션 반환 (쓰기 가능)

    요청마다 연결을 열고 응답 후 닫음.
    """
    async with SQLiteAdapter(settings.db_path, readonly=False) as db:
        yield db


async def get_ledger_service(
    db: SQLiteAdapter = Depends(get_db_write),
) -> LedgerService:
    """요청 범위 LedgerService 반환"""
    return LedgerService(LedgerStore(db))


def ledger_http_exception(error: LedgerError) -> HTTPException:
    """Ledger 예외 → HTTP 상태 코드

    - 404: 거래 없음, 계정 없음
    - 409: 이미 역분개됨, 계정 코드 중복
    - 400: 그 외 검증 오류
    """
    if isinstance(error, (TransactionNotFoundError, AccountNotFoundError)):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, (AlreadyReversedError, DuplicateAccountCodeError)):
        return HTTPException(status_code=409, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))
