"""
Mock Ledger 저장소

테스트/데모용 인메모리 ILedgerRepository 구현.
atomic() 진입 시 상태를 스냅샷하고, 예외 발생 시 복원.
"""

import asyncio
import copy
from contextlib import asynccontextmanager
from datetime import date
from decimal import Decimal
from typing import AsyncIterator

from core.ledger.errors import DuplicateAccountCodeError
from core.ledger.models import Account, Transaction, TransactionLine, transaction_number_sort_key


class InMemoryLedgerRepository:
    """인메모리 Ledger 저장소

    ILedgerRepository Protocol 구현.
    asyncio.Lock으로 작업 단위를 직렬화.

    사용 예시:
    ```python
    repository = InMemoryLedgerRepository()
    service = LedgerService(repository)

    await service.seed_chart_of_accounts("demo-business")
    ```
    """

    def __init__(self, fail_balance_update_after: int | None = None):
        """
        Args:
            fail_balance_update_after: N번째 잔액 갱신 이후 실패 (원자성 테스트용, None이면 비활성)
        """
        self.fail_balance_update_after = fail_balance_update_after
        self.balance_update_count = 0

        self.accounts: dict[str, Account] = {}
        self.transactions: dict[str, Transaction] = {}
        self.lines: dict[str, TransactionLine] = {}

        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        """원자적 작업 단위 (예외 시 진입 시점 상태로 복원)"""
        async with self._lock:
            snapshot = (
                copy.deepcopy(self.accounts),
                copy.deepcopy(self.transactions),
                copy.deepcopy(self.lines),
            )
            try:
                yield
            except BaseException:
                self.accounts, self.transactions, self.lines = snapshot
                raise

    # -------------------------------------------------------------------------
    # 계정
    # -------------------------------------------------------------------------

    async def find_account(self, business_id: str, account_id: str) -> Account | None:
        account = self.accounts.get(account_id)
        if account is None or account.business_id != business_id:
            return None
        return copy.copy(account)

    async def find_account_by_code(self, business_id: str, code: str) -> Account | None:
        for account in self.accounts.values():
            if account.business_id == business_id and account.code == code:
                return copy.copy(account)
        return None

    async def list_accounts(self, business_id: str) -> list[Account]:
        return sorted(
            (copy.copy(a) for a in self.accounts.values() if a.business_id == business_id),
            key=lambda a: a.code,
        )

    async def insert_account(self, account: Account) -> str:
        if await self.find_account_by_code(account.business_id, account.code) is not None:
            raise DuplicateAccountCodeError(account.business_id, account.code)
        self.accounts[account.account_id] = copy.copy(account)
        return account.account_id

    async def update_account(self, account: Account) -> None:
        stored = self.accounts.get(account.account_id)
        if stored is None or stored.business_id != account.business_id:
            raise LookupError(f"Account not found: {account.account_id}")

        duplicate = await self.find_account_by_code(account.business_id, account.code)
        if duplicate is not None and duplicate.account_id != account.account_id:
            raise DuplicateAccountCodeError(account.business_id, account.code)

        # balance는 유지
        stored.code = account.code
        stored.name = account.name
        stored.account_type = account.account_type
        stored.description = account.description
        stored.is_active = account.is_active

    async def increment_account_balance(self, account_id: str, delta: Decimal) -> None:
        if (
            self.fail_balance_update_after is not None
            and self.balance_update_count >= self.fail_balance_update_after
        ):
            raise RuntimeError(f"Simulated balance update failure: {account_id}")

        account = self.accounts.get(account_id)
        if account is None:
            raise LookupError(f"Account not found for balance update: {account_id}")

        account.balance += delta
        self.balance_update_count += 1

    # -------------------------------------------------------------------------
    # 거래
    # -------------------------------------------------------------------------

    async def find_max_transaction_number(self, business_id: str, prefix: str) -> str | None:
        numbers = [
            tx.transaction_number
            for tx in self.transactions.values()
            if tx.business_id == business_id and tx.transaction_number.startswith(prefix)
        ]
        if not numbers:
            return None
        return max(numbers, key=lambda n: (len(n), n))

    async def insert_transaction(self, transaction: Transaction) -> str:
        stored = copy.copy(transaction)
        stored.lines = []
        self.transactions[transaction.transaction_id] = stored
        return transaction.transaction_id

    async def insert_transaction_lines(self, lines: list[TransactionLine]) -> list[str]:
        for line in lines:
            self.lines[line.line_id] = copy.copy(line)
        return [line.line_id for line in lines]

    async def find_transaction(self, transaction_id: str) -> Transaction | None:
        stored = self.transactions.get(transaction_id)
        if stored is None:
            return None
        transaction = copy.copy(stored)
        transaction.lines = await self.find_transaction_lines(transaction_id)
        return transaction

    async def list_transactions(
        self,
        business_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[Transaction]:
        selected = [
            tx
            for tx in self.transactions.values()
            if tx.business_id == business_id
            and (start_date is None or tx.transaction_date >= start_date)
            and (end_date is None or tx.transaction_date <= end_date)
        ]
        selected.sort(key=lambda tx: transaction_number_sort_key(tx.transaction_number))
        return [await self.find_transaction(tx.transaction_id) for tx in selected]

    async def find_transaction_lines(self, transaction_id: str) -> list[TransactionLine]:
        return sorted(
            (copy.copy(line) for line in self.lines.values() if line.transaction_id == transaction_id),
            key=lambda line: line.line_order,
        )

    async def mark_reversed(self, transaction_id: str, reversed_by_transaction_id: str) -> None:
        stored = self.transactions.get(transaction_id)
        if stored is None:
            raise LookupError(f"Transaction not found: {transaction_id}")
        stored.is_reversed = True
        stored.reversed_by_transaction_id = reversed_by_transaction_id
