"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from datetime import date
from decimal import Decimal
from typing import AsyncContextManager, Protocol, runtime_checkable

from core.ledger.models import Account, Transaction, TransactionLine


@runtime_checkable
class ILedgerRepository(Protocol):
    """Ledger 저장소 인터페이스

    LedgerService가 사용하는 영속성 계층.
    atomic() 블록 안의 쓰기는 모두 성공하거나 모두 취소되어야 함.
    금액은 반드시 Decimal 타입 사용.
    """

    # -------------------------------------------------------------------------
    # 원자적 작업 단위
    # -------------------------------------------------------------------------

    def atomic(self) -> AsyncContextManager[None]:
        """원자적 작업 단위

        블록이 정상 종료되면 커밋, 예외 발생 시 전체 롤백.
        동시에 열린 작업 단위는 직렬화되어야 함 (분개 번호 중복 방지).

        사용 예시:
        ```python
        async with repository.atomic():
            await repository.insert_transaction(tx)
        ```
        """
        ...

    # -------------------------------------------------------------------------
    # 계정
    # -------------------------------------------------------------------------

    async def find_account(self, business_id: str, account_id: str) -> Account | None:
        """business 범위 내 계정 조회

        Returns:
            계정 또는 None (없거나 다른 business 소속)
        """
        ...

    async def find_account_by_code(self, business_id: str, code: str) -> Account | None:
        """계정 코드로 조회"""
        ...

    async def list_accounts(self, business_id: str) -> list[Account]:
        """business의 전체 계정 (코드 순)"""
        ...

    async def insert_account(self, account: Account) -> str:
        """계정 생성

        Returns:
            account_id

        Raises:
            DuplicateAccountCodeError: 같은 business에 동일 코드 존재
        """
        ...

    async def update_account(self, account: Account) -> None:
        """계정 속성 갱신 (code, name, account_type, description, is_active)

        balance는 갱신 대상이 아님 (잔액은 분개로만 변경).

        Raises:
            DuplicateAccountCodeError: 같은 business의 다른 계정이 동일 코드 사용
        """
        ...

    async def increment_account_balance(self, account_id: str, delta: Decimal) -> None:
        """계정 잔액 증감 (계정 단위 원자적)"""
        ...

    # -------------------------------------------------------------------------
    # 거래
    # -------------------------------------------------------------------------

    async def find_max_transaction_number(self, business_id: str, prefix: str) -> str | None:
        """접두사(JE-<연도>-)로 시작하는 최대 분개 번호

        Returns:
            최대 번호 또는 None (해당 연도 첫 거래)
        """
        ...

    async def insert_transaction(self, transaction: Transaction) -> str:
        """거래 헤더 저장 (항목 제외)

        Returns:
            transaction_id
        """
        ...

    async def insert_transaction_lines(self, lines: list[TransactionLine]) -> list[str]:
        """거래 항목 저장

        Returns:
            line_id 목록 (입력 순서)
        """
        ...

    async def find_transaction(self, transaction_id: str) -> Transaction | None:
        """거래 조회 (항목 포함)"""
        ...

    async def list_transactions(
        self,
        business_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[Transaction]:
        """business의 거래 목록 (항목 포함, 분개 번호 순)

        start_date / end_date는 거래일 기준 양끝 포함.
        """
        ...

    async def find_transaction_lines(self, transaction_id: str) -> list[TransactionLine]:
        """거래 항목 조회 (line_order 순)"""
        ...

    async def mark_reversed(self, transaction_id: str, reversed_by_transaction_id: str) -> None:
        """거래를 역분개 완료로 표시 (Active → Reversed)"""
        ...
