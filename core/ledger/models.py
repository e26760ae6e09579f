"""
Ledger 데이터 모델

계정(Account), 거래(Transaction), 거래 항목(TransactionLine)과
분개 입력(JournalLine) 정의. 금액은 모두 Decimal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

from core.constants import Numbering
from core.ledger.errors import InvalidEntryError

ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """금액을 Decimal로 변환

    float는 str을 거쳐 변환하여 이진 부동소수점 오차 유입 방지.

    Raises:
        InvalidEntryError: 숫자가 아니거나 유한하지 않은 값
    """
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError) as e:
            raise InvalidEntryError(f"Invalid amount: {value!r}") from e

    if not result.is_finite():
        raise InvalidEntryError(f"Invalid amount: {value!r}")
    return result


@dataclass
class JournalLine:
    """분개 입력 항목

    호출자가 post_journal_entry에 전달하는 한 줄.
    일반적으로 차변/대변 중 하나만 0이 아니지만 둘 다 허용 (순효과 = 차변 - 대변).
    """

    account_id: str
    debit_amount: Decimal = ZERO
    credit_amount: Decimal = ZERO
    description: str = ""

    def __post_init__(self) -> None:
        self.debit_amount = to_decimal(self.debit_amount)
        self.credit_amount = to_decimal(self.credit_amount)


@dataclass
class Account:
    """계정

    balance는 Ledger 분개 경로에서만 변경됨.
    """

    account_id: str
    business_id: str
    code: str
    name: str
    account_type: str
    balance: Decimal = ZERO
    is_active: bool = True
    description: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class TransactionLine:
    """저장된 거래 항목 (생성 후 불변)"""

    line_id: str
    transaction_id: str
    account_id: str
    debit_amount: Decimal
    credit_amount: Decimal
    description: str = ""
    line_order: int = 0


@dataclass
class Transaction:
    """거래 (분개)

    하나의 거래에 대한 복식부기 기록.
    차변 합계 = 대변 합계 > 0 (균형)
    """

    transaction_id: str
    business_id: str
    transaction_number: str
    transaction_date: date
    description: str
    transaction_type: str
    reference: str | None = None
    is_reversed: bool = False
    reversed_by_transaction_id: str | None = None
    created_by: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    lines: list[TransactionLine] = field(default_factory=list)

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit_amount for line in self.lines), ZERO)

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit_amount for line in self.lines), ZERO)

    def is_balanced(self) -> bool:
        """차변 합계 == 대변 합계 > 0"""
        return self.total_debit == self.total_credit and self.total_debit > ZERO


def entry_totals(lines: Iterable[JournalLine]) -> tuple[Decimal, Decimal]:
    """분개 입력의 (차변 합계, 대변 합계)"""
    total_debit = ZERO
    total_credit = ZERO
    for line in lines:
        total_debit += line.debit_amount
        total_credit += line.credit_amount
    return total_debit, total_credit


# =====================================
# 분개 번호 (JE-<연도>-<일련번호>)
# =====================================

def transaction_number_prefix(year: int) -> str:
    """연도별 분개 번호 접두사 (예: JE-2026-)"""
    return f"{Numbering.PREFIX}-{year}-"


def format_transaction_number(year: int, sequence: int) -> str:
    """분개 번호 생성 (예: JE-2026-000001)"""
    return f"{transaction_number_prefix(year)}{sequence:0{Numbering.SEQUENCE_WIDTH}d}"


def parse_sequence(transaction_number: str) -> int:
    """분개 번호에서 일련번호 추출 (JE-2026-000042 → 42)"""
    return int(transaction_number.rsplit("-", 1)[-1])


def next_transaction_number(year: int, last_number: str | None) -> str:
    """다음 분개 번호

    Args:
        year: 거래 연도
        last_number: 해당 business/연도의 현재 최대 번호 (없으면 None)

    Returns:
        last_number + 1 (없으면 000001)
    """
    sequence = parse_sequence(last_number) + 1 if last_number else 1
    return format_transaction_number(year, sequence)


def transaction_number_sort_key(transaction_number: str) -> tuple[str, int]:
    """분개 번호 정렬 키 (연도 접두사 → 일련번호)

    JE-2026-999999 < JE-2026-1000000 < JE-2027-000001
    """
    prefix, _, sequence = transaction_number.rpartition("-")
    return prefix, int(sequence)
