"""
Ledger 서비스

복식부기 분개 검증 및 원자적 기록.
모든 분개는 post_journal_entry 하나의 경로를 거침.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Sequence
from uuid import uuid4

from core.ledger.errors import (
    AccountNotFoundError,
    AlreadyReversedError,
    EmptyEntryError,
    ImbalancedEntryError,
    InvalidAmountError,
    InvalidEntryError,
    LedgerError,
    TransactionNotFoundError,
    UnknownOrInactiveAccountError,
)
from core.ledger.models import (
    ZERO,
    Account,
    JournalLine,
    Transaction,
    TransactionLine,
    entry_totals,
    next_transaction_number,
    to_decimal,
    transaction_number_prefix,
)
from core.ledger.types import (
    DEFAULT_CHART_OF_ACCOUNTS,
    AccountType,
    TransactionType,
    sign_for,
)

if TYPE_CHECKING:
    from adapters.interfaces import ILedgerRepository

logger = logging.getLogger(__name__)

REVERSAL_PREFIX = "Reversal: "


class LedgerService:
    """Ledger 서비스

    균형 잡힌 차변/대변 항목을 검증하고 하나의 작업 단위로 기록.
    인스턴스 상태 없음 (영속성은 저장소에 위임).

    Args:
        repository: ILedgerRepository 구현체 (LedgerStore 또는 InMemoryLedgerRepository)

    사용 예시:
    ```python
    service = LedgerService(LedgerStore(db))

    tx = await service.post_income(
        business_id="demo-business",
        income_account_id=revenue.account_id,
        cash_account_id=cash.account_id,
        amount=Decimal("500"),
        transaction_date=date(2026, 3, 1),
        description="Consulting fee",
    )
    print(tx.transaction_number)  # JE-2026-000001
    ```
    """

    def __init__(self, repository: ILedgerRepository):
        self.repository = repository

    # =====================================
    # 분개
    # =====================================

    async def post_journal_entry(
        self,
        business_id: str,
        transaction_date: date | datetime,
        description: str,
        reference: str | None,
        lines: Sequence[JournalLine],
        actor_id: str | None = None,
        transaction_type: TransactionType | str = TransactionType.MANUAL_JOURNAL,
    ) -> Transaction:
        """분개 기록

        검증 순서:
        1. 차변 합계 == 대변 합계 (ImbalancedEntryError)
        2. 합계 > 0 (EmptyEntryError)
        3. 모든 계정이 business 소속이며 활성 (UnknownOrInactiveAccountError)

        검증은 쓰기 전에 끝나고, 쓰기(거래 + 항목 + 잔액)는 하나의 작업 단위.

        Args:
            business_id: 소속 business
            transaction_date: 거래일 (연도로 분개 번호 채번)
            description: 적요
            reference: 참조 번호 (선택)
            lines: 분개 항목
            actor_id: 기록자 (선택)
            transaction_type: 거래 유형

        Returns:
            기록된 거래 (transaction_id, transaction_number, lines 포함)
        """
        try:
            transaction_type = TransactionType(transaction_type)
        except ValueError as e:
            raise InvalidEntryError(f"Unknown transaction type: {transaction_type}") from e

        try:
            self._validate_entry(business_id, lines)
        except LedgerError as e:
            logger.warning(f"Journal entry rejected: {e}", extra={"business_id": business_id})
            raise

        async with self.repository.atomic():
            transaction = await self._write_entry(
                business_id=business_id,
                transaction_date=transaction_date,
                description=description,
                reference=reference,
                lines=lines,
                actor_id=actor_id,
                transaction_type=transaction_type,
            )

        logger.info(
            f"Posted journal entry: {transaction.transaction_number}",
            extra={
                "business_id": business_id,
                "transaction_id": transaction.transaction_id,
                "amount": str(transaction.total_debit),
            },
        )
        return transaction

    async def post_income(
        self,
        business_id: str,
        income_account_id: str,
        cash_account_id: str,
        amount: Decimal | int | float | str,
        transaction_date: date | datetime,
        description: str,
        reference: str | None = None,
        actor_id: str | None = None,
    ) -> Transaction:
        """수익 분개 (차변: 현금, 대변: 수익)

        Raises:
            InvalidAmountError: amount <= 0
        """
        value = to_decimal(amount)
        if value <= ZERO:
            raise InvalidAmountError(value, "Income amount must be greater than zero.")

        lines = [
            JournalLine(cash_account_id, debit_amount=value, description="Income received"),
            JournalLine(income_account_id, credit_amount=value, description=description),
        ]
        return await self.post_journal_entry(
            business_id,
            transaction_date,
            description,
            reference,
            lines,
            actor_id=actor_id,
            transaction_type=TransactionType.INCOME,
        )

    async def post_expense(
        self,
        business_id: str,
        expense_account_id: str,
        cash_account_id: str,
        amount: Decimal | int | float | str,
        transaction_date: date | datetime,
        description: str,
        reference: str | None = None,
        actor_id: str | None = None,
    ) -> Transaction:
        """비용 분개 (차변: 비용, 대변: 현금)

        Raises:
            InvalidAmountError: amount <= 0
        """
        value = to_decimal(amount)
        if value <= ZERO:
            raise InvalidAmountError(value, "Expense amount must be greater than zero.")

        lines = [
            JournalLine(expense_account_id, debit_amount=value, description=description),
            JournalLine(cash_account_id, credit_amount=value, description="Expense paid"),
        ]
        return await self.post_journal_entry(
            business_id,
            transaction_date,
            description,
            reference,
            lines,
            actor_id=actor_id,
            transaction_type=TransactionType.EXPENSE,
        )

    async def reverse_transaction(
        self,
        transaction_id: str,
        reason: str,
        actor_id: str | None = None,
        reversal_date: date | None = None,
    ) -> Transaction:
        """역분개

        원 거래의 차변/대변을 바꾼 새 거래를 기록하고 원 거래를 Reversed로 표시.
        두 쓰기는 같은 작업 단위이며, 작업 단위 안에서 역분개 여부를 다시 확인.

        Args:
            transaction_id: 원 거래 ID
            reason: 역분개 사유 (적요에 포함)
            actor_id: 기록자 (선택)
            reversal_date: 역분개 거래일 (기본: 오늘, UTC)

        Returns:
            역분개 거래

        Raises:
            TransactionNotFoundError: 원 거래 없음
            AlreadyReversedError: 이미 역분개됨
        """
        original = await self.repository.find_transaction(transaction_id)
        if original is None:
            raise TransactionNotFoundError(transaction_id)
        if original.is_reversed:
            logger.warning(f"Reversal rejected, already reversed: {original.transaction_number}")
            raise AlreadyReversedError(transaction_id)

        reversed_lines = [
            JournalLine(
                account_id=line.account_id,
                debit_amount=line.credit_amount,
                credit_amount=line.debit_amount,
                description=f"{REVERSAL_PREFIX}{line.description}",
            )
            for line in original.lines
        ]
        self._validate_entry(original.business_id, reversed_lines)

        async with self.repository.atomic():
            # 동시 역분개 방지 (쓰기 잠금 하에서 재확인)
            current = await self.repository.find_transaction(transaction_id)
            if current is None:
                raise TransactionNotFoundError(transaction_id)
            if current.is_reversed:
                raise AlreadyReversedError(transaction_id)

            reversal = await self._write_entry(
                business_id=original.business_id,
                transaction_date=reversal_date or datetime.now(timezone.utc).date(),
                description=f"{REVERSAL_PREFIX}{original.description} - {reason}",
                reference=f"REV-{original.transaction_number}",
                lines=reversed_lines,
                actor_id=actor_id,
                transaction_type=TransactionType.MANUAL_JOURNAL,
            )
            await self.repository.mark_reversed(transaction_id, reversal.transaction_id)

        logger.info(
            f"Reversed {original.transaction_number} with {reversal.transaction_number}",
            extra={"business_id": original.business_id, "reason": reason},
        )
        return reversal

    # =====================================
    # 조회
    # =====================================

    async def get_transaction(self, transaction_id: str) -> Transaction:
        """거래 조회 (항목 포함)

        Raises:
            TransactionNotFoundError: 거래 없음
        """
        transaction = await self.repository.find_transaction(transaction_id)
        if transaction is None:
            raise TransactionNotFoundError(transaction_id)
        return transaction

    async def get_account(self, business_id: str, account_id: str) -> Account | None:
        return await self.repository.find_account(business_id, account_id)

    async def list_accounts(self, business_id: str) -> list[Account]:
        return await self.repository.list_accounts(business_id)

    async def list_transactions(
        self,
        business_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[Transaction]:
        """business의 거래 목록 (항목 포함, 분개 번호 순)

        Raises:
            InvalidEntryError: start_date > end_date
        """
        if start_date is not None and end_date is not None and start_date > end_date:
            raise InvalidEntryError(f"start_date {start_date} is after end_date {end_date}.")
        return await self.repository.list_transactions(business_id, start_date, end_date)

    # =====================================
    # 계정과목표
    # =====================================

    async def create_account(
        self,
        business_id: str,
        code: str,
        name: str,
        account_type: AccountType | str,
        description: str | None = None,
        is_active: bool = True,
    ) -> Account:
        """계정 생성 (잔액 0으로 시작)

        Raises:
            InvalidEntryError: business_id/code/name 누락 또는 알 수 없는 계정 유형
            DuplicateAccountCodeError: 같은 business에 동일 코드 존재
        """
        if not business_id or not code or not name:
            raise InvalidEntryError("business_id, code and name are required.")

        try:
            normalized_type = AccountType(account_type).value
        except ValueError as e:
            raise InvalidEntryError(f"Unknown account type: {account_type}") from e

        account = Account(
            account_id=uuid4().hex,
            business_id=business_id,
            code=code,
            name=name,
            account_type=normalized_type,
            balance=ZERO,
            is_active=is_active,
            description=description,
        )
        await self.repository.insert_account(account)

        logger.info(f"Account created: {business_id}/{code} {name}")
        return account

    async def update_account(
        self,
        business_id: str,
        account_id: str,
        code: str | None = None,
        name: str | None = None,
        account_type: AccountType | str | None = None,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> Account:
        """계정 속성 수정 (None인 항목은 유지)

        잔액은 수정 대상이 아님. 잔액이 0이 아닌 계정은 유형 변경 불가
        (유형에 따라 잔액 부호의 의미가 달라짐).

        조회와 갱신은 같은 작업 단위이므로 진행 중인 분개와 직렬화됨.

        Raises:
            AccountNotFoundError: 계정 없음 또는 다른 business 소속
            InvalidEntryError: 빈 code/name, 알 수 없는 유형, 잔액이 있는 계정의 유형 변경
            DuplicateAccountCodeError: 같은 business의 다른 계정이 동일 코드 사용
        """
        if code is not None and not code:
            raise InvalidEntryError("code must not be empty.")
        if name is not None and not name:
            raise InvalidEntryError("name must not be empty.")

        normalized_type: str | None = None
        if account_type is not None:
            try:
                normalized_type = AccountType(account_type).value
            except ValueError as e:
                raise InvalidEntryError(f"Unknown account type: {account_type}") from e

        async with self.repository.atomic():
            current = await self.repository.find_account(business_id, account_id)
            if current is None:
                raise AccountNotFoundError(account_id)

            if (
                normalized_type is not None
                and normalized_type != current.account_type
                and current.balance != ZERO
            ):
                raise InvalidEntryError(
                    f"Account type cannot change while balance is {current.balance}."
                )

            updated = replace(
                current,
                code=code if code is not None else current.code,
                name=name if name is not None else current.name,
                account_type=normalized_type or current.account_type,
                description=description if description is not None else current.description,
                is_active=is_active if is_active is not None else current.is_active,
            )
            await self.repository.update_account(updated)

        logger.info(
            f"Account updated: {business_id}/{updated.code} (active={updated.is_active})",
            extra={"business_id": business_id},
        )
        return updated

    async def deactivate_account(self, business_id: str, account_id: str) -> Account:
        """계정 비활성화

        항목이 참조하는 계정은 삭제하지 않고 비활성화만 함.
        이후 이 계정으로의 분개는 UnknownOrInactiveAccountError.
        """
        return await self.update_account(business_id, account_id, is_active=False)

    async def seed_chart_of_accounts(self, business_id: str) -> list[Account]:
        """기본 계정과목표 생성

        이미 존재하는 코드는 건너뜀.

        Returns:
            새로 생성된 계정 목록
        """
        created: list[Account] = []
        for code, name, account_type, description in DEFAULT_CHART_OF_ACCOUNTS:
            if await self.repository.find_account_by_code(business_id, code) is not None:
                continue
            created.append(
                await self.create_account(business_id, code, name, account_type, description)
            )

        logger.info(f"Chart of accounts seeded: {business_id} ({len(created)} created)")
        return created

    # =====================================
    # 내부
    # =====================================

    @staticmethod
    def _validate_entry(business_id: str, lines: Sequence[JournalLine]) -> None:
        """쓰기 전 입력 검증 (저장소 접근 없음)"""
        if not business_id:
            raise InvalidEntryError("business_id is required.")

        for line in lines:
            if not line.account_id:
                raise InvalidEntryError("Every line needs an account_id.")
            if line.debit_amount < ZERO or line.credit_amount < ZERO:
                raise InvalidEntryError(
                    f"Line amounts must be non-negative (account {line.account_id})."
                )

        total_debit, total_credit = entry_totals(lines)
        if total_debit != total_credit:
            raise ImbalancedEntryError(total_debit, total_credit)
        if total_debit == ZERO:
            raise EmptyEntryError()

    async def _load_posting_accounts(
        self,
        business_id: str,
        lines: Sequence[JournalLine],
    ) -> dict[str, Account]:
        """항목의 모든 계정 조회 (없거나 비활성이면 실패)"""
        accounts: dict[str, Account] = {}
        for line in lines:
            if line.account_id in accounts:
                continue
            account = await self.repository.find_account(business_id, line.account_id)
            if account is None or not account.is_active:
                logger.warning(f"Journal entry rejected, unknown or inactive account: {line.account_id}")
                raise UnknownOrInactiveAccountError(line.account_id)
            accounts[line.account_id] = account
        return accounts

    async def _write_entry(
        self,
        business_id: str,
        transaction_date: date | datetime,
        description: str,
        reference: str | None,
        lines: Sequence[JournalLine],
        actor_id: str | None,
        transaction_type: TransactionType | str,
    ) -> Transaction:
        """작업 단위 안에서 호출: 계정 확인 → 채번 → 거래/항목 저장 → 잔액 갱신"""
        accounts = await self._load_posting_accounts(business_id, lines)

        if isinstance(transaction_date, datetime):
            transaction_date = transaction_date.date()

        year = transaction_date.year
        last_number = await self.repository.find_max_transaction_number(
            business_id, transaction_number_prefix(year)
        )

        transaction = Transaction(
            transaction_id=uuid4().hex,
            business_id=business_id,
            transaction_number=next_transaction_number(year, last_number),
            transaction_date=transaction_date,
            description=description,
            reference=reference,
            transaction_type=TransactionType(transaction_type).value,
            created_by=actor_id,
        )
        await self.repository.insert_transaction(transaction)

        stored_lines = [
            TransactionLine(
                line_id=uuid4().hex,
                transaction_id=transaction.transaction_id,
                account_id=line.account_id,
                debit_amount=line.debit_amount,
                credit_amount=line.credit_amount,
                description=line.description,
                line_order=i,
            )
            for i, line in enumerate(lines)
        ]
        await self.repository.insert_transaction_lines(stored_lines)

        for line in stored_lines:
            account = accounts[line.account_id]
            delta = sign_for(account.account_type) * (line.debit_amount - line.credit_amount)
            await self.repository.increment_account_balance(line.account_id, delta)

        transaction.lines = stored_lines
        return transaction


def journal_lines_from_dicts(items: Sequence[dict[str, Any]]) -> list[JournalLine]:
    """dict 목록 → JournalLine 목록 (스크립트/외부 입력용)"""
    return [
        JournalLine(
            account_id=item["account_id"],
            debit_amount=item.get("debit_amount", ZERO),
            credit_amount=item.get("credit_amount", ZERO),
            description=item.get("description", ""),
        )
        for item in items
    ]
