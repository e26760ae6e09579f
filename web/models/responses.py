"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from core.ledger.models import Account, Transaction, TransactionLine


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    mode: str = Field(..., description="실행 모드 (development/production)")
    timestamp: datetime = Field(..., description="응답 시간 (UTC)")


class AccountResponse(BaseModel):
    """계정 응답"""

    account_id: str = Field(..., description="계정 ID")
    business_id: str = Field(..., description="business ID")
    code: str = Field(..., description="계정 코드")
    name: str = Field(..., description="계정 이름")
    account_type: str = Field(..., description="계정 유형")
    balance: str = Field(..., description="잔액 (정상 잔액 방향 기준)")
    is_active: bool = Field(..., description="활성 여부")
    description: str | None = Field(default=None, description="설명")

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        return cls(
            account_id=account.account_id,
            business_id=account.business_id,
            code=account.code,
            name=account.name,
            account_type=account.account_type,
            balance=str(account.balance),
            is_active=account.is_active,
            description=account.description,
        )


class AccountListResponse(BaseModel):
    """계정 목록 응답"""

    accounts: list[AccountResponse] = Field(default_factory=list, description="계정 목록")
    total: int = Field(default=0, description="계정 수")


class TransactionLineResponse(BaseModel):
    """거래 항목 응답"""

    line_id: str = Field(..., description="항목 ID")
    account_id: str = Field(..., description="계정 ID")
    debit_amount: str = Field(..., description="차변 금액")
    credit_amount: str = Field(..., description="대변 금액")
    description: str = Field(default="", description="항목 적요")
    line_order: int = Field(..., description="순서")

    @classmethod
    def from_line(cls, line: TransactionLine) -> "TransactionLineResponse":
        return cls(
            line_id=line.line_id,
            account_id=line.account_id,
            debit_amount=str(line.debit_amount),
            credit_amount=str(line.credit_amount),
            description=line.description,
            line_order=line.line_order,
        )


class TransactionResponse(BaseModel):
    """거래 응답 (항목 포함)"""

    transaction_id: str = Field(..., description="거래 ID")
    business_id: str = Field(..., description="business ID")
    transaction_number: str = Field(..., description="분개 번호 (JE-YYYY-NNNNNN)")
    transaction_date: date = Field(..., description="거래일")
    description: str = Field(..., description="적요")
    reference: str | None = Field(default=None, description="참조 번호")
    transaction_type: str = Field(..., description="거래 유형")
    is_reversed: bool = Field(default=False, description="역분개 여부")
    reversed_by_transaction_id: str | None = Field(default=None, description="역분개 거래 ID")
    created_by: str | None = Field(default=None, description="기록자")
    total_debit: str = Field(..., description="차변 합계")
    total_credit: str = Field(..., description="대변 합계")
    lines: list[TransactionLineResponse] = Field(default_factory=list, description="거래 항목")

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> "TransactionResponse":
        return cls(
            transaction_id=transaction.transaction_id,
            business_id=transaction.business_id,
            transaction_number=transaction.transaction_number,
            transaction_date=transaction.transaction_date,
            description=transaction.description,
            reference=transaction.reference,
            transaction_type=transaction.transaction_type,
            is_reversed=transaction.is_reversed,
            reversed_by_transaction_id=transaction.reversed_by_transaction_id,
            created_by=transaction.created_by,
            total_debit=str(transaction.total_debit),
            total_credit=str(transaction.total_credit),
            lines=[TransactionLineResponse.from_line(line) for line in transaction.lines],
        )


class TransactionListResponse(BaseModel):
    """거래 목록 응답"""

    transactions: list[TransactionResponse] = Field(default_factory=list, description="거래 목록")
    total: int = Field(default=0, description="거래 수")
