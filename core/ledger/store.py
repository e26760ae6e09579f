"""
Ledger 저장소

복식부기 계정/거래/거래 항목 저장 및 조회 (SQLite)
ILedgerRepository Protocol 구현체.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from contextlib import asynccontextmanager
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, AsyncIterator

from core.ledger.errors import DuplicateAccountCodeError
from core.ledger.models import Account, Transaction, TransactionLine, transaction_number_sort_key

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


_ACCOUNT_COLUMNS = """
    account_id, business_id, code, name, account_type,
    balance, is_active, description, created_at
"""

_TRANSACTION_COLUMNS = """
    transaction_id, business_id, transaction_number, transaction_date,
    description, reference, transaction_type, is_reversed,
    reversed_by_transaction_id, created_by, created_at
"""

_LINE_COLUMNS = """
    line_id, transaction_id, account_id, debit_amount, credit_amount,
    description, line_order
"""


class LedgerStore:
    """Ledger 저장소

    account / ledger_transaction / transaction_line 테이블을 읽고 쓰는 클래스.
    atomic() 블록은 BEGIN IMMEDIATE 트랜잭션으로 실행되어
    분개 번호 채번과 잔액 갱신이 직렬화됨.

    Args:
        db: SQLite 어댑터 (쓰기 가능)
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        # 같은 연결을 공유하는 코루틴 간 작업 단위 직렬화
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        """원자적 작업 단위 (성공 시 커밋, 예외 시 롤백)"""
        async with self._lock:
            async with self.db.transaction():
                yield

    # =====================================
    # 계정
    # =====================================

    async def find_account(self, business_id: str, account_id: str) -> Account | None:
        """business 범위 내 계정 조회

        Args:
            business_id: 소속 business
            account_id: 계정 ID

        Returns:
            계정 정보 (없거나 다른 business 소속이면 None)
        """
        row = await self.db.fetchone(
            f"""
            SELECT {_ACCOUNT_COLUMNS}
            FROM account
            WHERE account_id = ? AND business_id = ?
            """,
            (account_id, business_id),
        )
        return _row_to_account(row) if row else None

    async def find_account_by_code(self, business_id: str, code: str) -> Account | None:
        """계정 코드로 조회"""
        row = await self.db.fetchone(
            f"""
            SELECT {_ACCOUNT_COLUMNS}
            FROM account
            WHERE business_id = ? AND code = ?
            """,
            (business_id, code),
        )
        return _row_to_account(row) if row else None

    async def list_accounts(self, business_id: str) -> list[Account]:
        """계정 목록 조회 (코드 순)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {_ACCOUNT_COLUMNS}
            FROM account
            WHERE business_id = ?
            ORDER BY code
            """,
            (business_id,),
        )
        return [_row_to_account(row) for row in rows]

    async def insert_account(self, account: Account) -> str:
        """계정 생성

        Returns:
            account_id

        Raises:
            DuplicateAccountCodeError: 같은 business에 동일 코드 존재
        """
        try:
            await self.db.execute(
                """
                INSERT INTO account (
                    account_id, business_id, code, name, account_type,
                    balance, is_active, description, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    account.account_id,
                    account.business_id,
                    account.code,
                    account.name,
                    account.account_type,
                    str(account.balance),
                    1 if account.is_active else 0,
                    account.description,
                    account.created_at.isoformat(),
                ),
            )
        except sqlite3.IntegrityError as e:
            if "account.business_id, account.code" in str(e):
                raise DuplicateAccountCodeError(account.business_id, account.code) from e
            raise

        logger.debug(f"Inserted account: {account.business_id}/{account.code}")
        return account.account_id

    async def update_account(self, account: Account) -> None:
        """계정 속성 갱신 (balance 제외)

        Raises:
            DuplicateAccountCodeError: 같은 business의 다른 계정이 동일 코드 사용
        """
        try:
            await self.db.execute(
                """
                UPDATE account
                SET code = ?,
                    name = ?,
                    account_type = ?,
                    description = ?,
                    is_active = ?,
                    updated_at = datetime('now')
                WHERE account_id = ? AND business_id = ?
                """,
                (
                    account.code,
                    account.name,
                    account.account_type,
                    account.description,
                    1 if account.is_active else 0,
                    account.account_id,
                    account.business_id,
                ),
            )
        except sqlite3.IntegrityError as e:
            if "account.business_id, account.code" in str(e):
                raise DuplicateAccountCodeError(account.business_id, account.code) from e
            raise

    async def increment_account_balance(self, account_id: str, delta: Decimal) -> None:
        """계정 잔액 증감

        atomic() 블록 안에서는 쓰기 잠금이 이미 잡혀 있으므로
        조회 후 갱신 사이에 다른 쓰기가 끼어들 수 없음.
        블록 밖에서 호출되면 자체 트랜잭션으로 감쌈.
        """
        if self.db.in_transaction:
            await self._apply_balance_delta(account_id, delta)
            return

        async with self.db.transaction():
            await self._apply_balance_delta(account_id, delta)

    async def _apply_balance_delta(self, account_id: str, delta: Decimal) -> None:
        row = await self.db.fetchone(
            "SELECT balance FROM account WHERE account_id = ?",
            (account_id,),
        )
        if row is None:
            raise LookupError(f"Account not found for balance update: {account_id}")

        new_balance = Decimal(row[0]) + delta

        await self.db.execute(
            """
            UPDATE account
            SET balance = ?, updated_at = datetime('now')
            WHERE account_id = ?
            """,
            (str(new_balance), account_id),
        )

    # =====================================
    # 거래
    # =====================================

    async def find_max_transaction_number(self, business_id: str, prefix: str) -> str | None:
        """접두사로 시작하는 최대 분개 번호

        일련번호가 6자리를 넘는 경우를 위해 길이 우선 정렬.
        """
        row = await self.db.fetchone(
            """
            SELECT transaction_number
            FROM ledger_transaction
            WHERE business_id = ?
              AND substr(transaction_number, 1, ?) = ?
            ORDER BY LENGTH(transaction_number) DESC, transaction_number DESC
            LIMIT 1
            """,
            (business_id, len(prefix), prefix),
        )
        return row[0] if row else None

    async def insert_transaction(self, transaction: Transaction) -> str:
        """거래 헤더 저장

        Returns:
            transaction_id
        """
        await self.db.execute(
            """
            INSERT INTO ledger_transaction (
                transaction_id, business_id, transaction_number, transaction_date,
                description, reference, transaction_type, is_reversed,
                reversed_by_transaction_id, created_by, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                transaction.transaction_id,
                transaction.business_id,
                transaction.transaction_number,
                transaction.transaction_date.isoformat(),
                transaction.description,
                transaction.reference,
                transaction.transaction_type,
                1 if transaction.is_reversed else 0,
                transaction.reversed_by_transaction_id,
                transaction.created_by,
                transaction.created_at.isoformat(),
            ),
        )
        return transaction.transaction_id

    async def insert_transaction_lines(self, lines: list[TransactionLine]) -> list[str]:
        """거래 항목 저장

        Returns:
            line_id 목록 (입력 순서)
        """
        await self.db.executemany(
            """
            INSERT INTO transaction_line (
                line_id, transaction_id, account_id,
                debit_amount, credit_amount, description, line_order
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            [
                (
                    line.line_id,
                    line.transaction_id,
                    line.account_id,
                    str(line.debit_amount),
                    str(line.credit_amount),
                    line.description,
                    line.line_order,
                )
                for line in lines
            ],
        )
        return [line.line_id for line in lines]

    async def find_transaction(self, transaction_id: str) -> Transaction | None:
        """거래 단건 조회 (항목 포함)

        Args:
            transaction_id: 거래 ID

        Returns:
            거래 정보 (없으면 None)
        """
        row = await self.db.fetchone(
            f"""
            SELECT {_TRANSACTION_COLUMNS}
            FROM ledger_transaction
            WHERE transaction_id = ?
            """,
            (transaction_id,),
        )

        if not row:
            return None

        transaction = _row_to_transaction(row)
        transaction.lines = await self.find_transaction_lines(transaction_id)
        return transaction

    async def list_transactions(
        self,
        business_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[Transaction]:
        """거래 목록 조회 (항목 포함, 분개 번호 순)

        Args:
            business_id: 소속 business
            start_date: 시작 거래일 (포함, 선택)
            end_date: 종료 거래일 (포함, 선택)
        """
        conditions = ["business_id = ?"]
        params: list[Any] = [business_id]

        if start_date is not None:
            conditions.append("transaction_date >= ?")
            params.append(start_date.isoformat())
        if end_date is not None:
            conditions.append("transaction_date <= ?")
            params.append(end_date.isoformat())

        rows = await self.db.fetchall(
            f"""
            SELECT {_TRANSACTION_COLUMNS}
            FROM ledger_transaction
            WHERE {" AND ".join(conditions)}
            """,
            tuple(params),
        )

        transactions = sorted(
            (_row_to_transaction(row) for row in rows),
            key=lambda t: transaction_number_sort_key(t.transaction_number),
        )
        for transaction in transactions:
            transaction.lines = await self.find_transaction_lines(transaction.transaction_id)
        return transactions

    async def find_transaction_lines(self, transaction_id: str) -> list[TransactionLine]:
        """거래 항목 조회 (line_order 순)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {_LINE_COLUMNS}
            FROM transaction_line
            WHERE transaction_id = ?
            ORDER BY line_order
            """,
            (transaction_id,),
        )
        return [_row_to_line(row) for row in rows]

    async def mark_reversed(self, transaction_id: str, reversed_by_transaction_id: str) -> None:
        """역분개 완료 표시"""
        await self.db.execute(
            """
            UPDATE ledger_transaction
            SET is_reversed = 1,
                reversed_by_transaction_id = ?,
                updated_at = datetime('now')
            WHERE transaction_id = ?
            """,
            (reversed_by_transaction_id, transaction_id),
        )


# =====================================
# Row 변환
# =====================================

def _row_to_account(row: tuple[Any, ...]) -> Account:
    return Account(
        account_id=row[0],
        business_id=row[1],
        code=row[2],
        name=row[3],
        account_type=row[4],
        balance=Decimal(row[5]),
        is_active=bool(row[6]),
        description=row[7],
        created_at=datetime.fromisoformat(row[8]),
    )


def _row_to_transaction(row: tuple[Any, ...]) -> Transaction:
    return Transaction(
        transaction_id=row[0],
        business_id=row[1],
        transaction_number=row[2],
        transaction_date=date.fromisoformat(row[3]),
        description=row[4],
        reference=row[5],
        transaction_type=row[6],
        is_reversed=bool(row[7]),
        reversed_by_transaction_id=row[8],
        created_by=row[9],
        created_at=datetime.fromisoformat(row[10]),
    )


def _row_to_line(row: tuple[Any, ...]) -> TransactionLine:
    return TransactionLine(
        line_id=row[0],
        transaction_id=row[1],
        account_id=row[2],
        debit_amount=Decimal(row[3]),
        credit_amount=Decimal(row[4]),
        description=row[5] or "",
        line_order=row[6],
    )
