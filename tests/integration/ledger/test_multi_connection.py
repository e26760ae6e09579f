"""다중 연결 동시성 테스트

Web 요청처럼 연결마다 별도의 SQLiteAdapter/LedgerStore를 사용.
연결 간 직렬화는 BEGIN IMMEDIATE 쓰기 잠금이 담당.
"""

import asyncio
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger.errors import AlreadyReversedError
from core.ledger.schema import init_ledger_schema
from core.ledger.service import LedgerService
from core.ledger.store import LedgerStore

BUSINESS_ID = "biz-shared"
CONNECTION_COUNT = 8


@pytest_asyncio.fixture
async def db_path(tmp_path: Path) -> Path:
    """스키마와 기본 계정과목표가 준비된 DB 파일"""
    path = tmp_path / "shared_ledger.db"
    async with SQLiteAdapter(path) as db:
        await init_ledger_schema(db)
        await LedgerService(LedgerStore(db)).seed_chart_of_accounts(BUSINESS_ID)
    return path


@pytest_asyncio.fixture
async def services(db_path: Path) -> list[LedgerService]:
    """연결마다 하나씩 만든 LedgerService 목록"""
    adapters = [SQLiteAdapter(db_path) for _ in range(CONNECTION_COUNT)]
    for adapter in adapters:
        await adapter.connect()

    yield [LedgerService(LedgerStore(adapter)) for adapter in adapters]

    for adapter in adapters:
        await adapter.close()


async def account_ids(service: LedgerService) -> tuple[str, str]:
    """(수익 계정 ID, 현금 계정 ID)"""
    accounts = {a.code: a for a in await service.list_accounts(BUSINESS_ID)}
    return accounts["4000"].account_id, accounts["1000"].account_id


class TestMultiConnection:
    """연결 간 채번 / 역분개 직렬화"""

    @pytest.mark.asyncio
    async def test_numbers_distinct_across_connections(self, services: list[LedgerService]) -> None:
        revenue_id, cash_id = await account_ids(services[0])

        results = await asyncio.gather(*[
            service.post_income(BUSINESS_ID, revenue_id, cash_id, Decimal("1"), date(2026, 7, 1), f"sale {i}")
            for i, service in enumerate(services)
        ])

        numbers = sorted(tx.transaction_number for tx in results)
        assert numbers == [f"JE-2026-{i:06d}" for i in range(1, CONNECTION_COUNT + 1)]

        cash = await services[0].get_account(BUSINESS_ID, cash_id)
        assert cash.balance == Decimal(CONNECTION_COUNT)

    @pytest.mark.asyncio
    async def test_only_one_reversal_across_connections(self, services: list[LedgerService]) -> None:
        revenue_id, cash_id = await account_ids(services[0])
        original = await services[0].post_income(
            BUSINESS_ID, revenue_id, cash_id, Decimal("50"), date(2026, 7, 1), "consulting"
        )

        contenders = services[:4]
        results = await asyncio.gather(
            *[
                service.reverse_transaction(
                    original.transaction_id, f"attempt {i}", reversal_date=date(2026, 7, 2)
                )
                for i, service in enumerate(contenders)
            ],
            return_exceptions=True,
        )

        errors = [r for r in results if isinstance(r, Exception)]
        reversals = [r for r in results if not isinstance(r, Exception)]
        assert len(reversals) == 1
        assert len(errors) == len(contenders) - 1
        assert all(isinstance(e, AlreadyReversedError) for e in errors)

        stored = await services[-1].get_transaction(original.transaction_id)
        assert stored.is_reversed is True
        assert stored.reversed_by_transaction_id == reversals[0].transaction_id

        transactions = await services[-1].list_transactions(BUSINESS_ID)
        assert len(transactions) == 2
        cash = await services[-1].get_account(BUSINESS_ID, cash_id)
        assert cash.balance == Decimal("0")
