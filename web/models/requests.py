"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증
금액은 문자열로 받아 Decimal로 변환 (부동소수점 오차 방지)
"""

from datetime import date

from pydantic import BaseModel, Field


class AccountCreateRequest(BaseModel):
    """계정 생성 요청"""

    code: str = Field(..., min_length=1, description="계정 코드 (business 내 고유)")
    name: str = Field(..., min_length=1, description="계정 이름")
    account_type: str = Field(..., description="계정 유형 (asset/liability/equity/income/expense)")
    description: str | None = Field(default=None, description="설명")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "code": "5300",
                    "name": "Software Subscriptions",
                    "account_type": "expense",
                }
            ]
        }
    }


class AccountUpdateRequest(BaseModel):
    """계정 수정 요청

    생략한 항목은 유지. 잔액(balance)은 받지 않음 (분개로만 변경).
    """

    code: str | None = Field(default=None, min_length=1, description="계정 코드")
    name: str | None = Field(default=None, min_length=1, description="계정 이름")
    account_type: str | None = Field(default=None, description="계정 유형")
    description: str | None = Field(default=None, description="설명")
    is_active: bool | None = Field(default=None, description="활성 여부")

    model_config = {
        "extra": "forbid",
        "json_schema_extra": {
            "examples": [
                {"name": "Office Rent", "is_active": True},
            ]
        },
    }


class JournalLineRequest(BaseModel):
    """분개 항목 요청"""

    account_id: str = Field(..., description="계정 ID")
    debit_amount: str = Field(default="0", description="차변 금액")
    credit_amount: str = Field(default="0", description="대변 금액")
    description: str = Field(default="", description="항목 적요")


class JournalEntryCreateRequest(BaseModel):
    """분개 기록 요청

    차변 합계와 대변 합계가 같아야 함.
    """

    transaction_date: date = Field(..., description="거래일 (YYYY-MM-DD)")
    description: str = Field(..., description="적요")
    reference: str | None = Field(default=None, description="참조 번호")
    lines: list[JournalLineRequest] = Field(..., description="분개 항목")
    actor_id: str | None = Field(default=None, description="기록자")
    transaction_type: str = Field(default="manual_journal", description="거래 유형")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "transaction_date": "2026-01-05",
                    "description": "Owner investment",
                    "lines": [
                        {"account_id": "<cash account id>", "debit_amount": "1000"},
                        {"account_id": "<equity account id>", "credit_amount": "1000"},
                    ],
                }
            ]
        }
    }


class IncomeCreateRequest(BaseModel):
    """수익 기록 요청 (현금 차변 / 수익 대변)"""

    income_account_id: str = Field(..., description="수익 계정 ID")
    cash_account_id: str = Field(..., description="현금 계정 ID")
    amount: str = Field(..., description="금액 (0 초과)")
    transaction_date: date = Field(..., description="거래일 (YYYY-MM-DD)")
    description: str = Field(..., description="적요")
    reference: str | None = Field(default=None, description="참조 번호")
    actor_id: str | None = Field(default=None, description="기록자")


class ExpenseCreateRequest(BaseModel):
    """비용 기록 요청 (비용 차변 / 현금 대변)"""

    expense_account_id: str = Field(..., description="비용 계정 ID")
    cash_account_id: str = Field(..., description="현금 계정 ID")
    amount: str = Field(..., description="금액 (0 초과)")
    transaction_date: date = Field(..., description="거래일 (YYYY-MM-DD)")
    description: str = Field(..., description="적요")
    reference: str | None = Field(default=None, description="참조 번호")
    actor_id: str | None = Field(default=None, description="기록자")


class ReverseTransactionRequest(BaseModel):
    """역분개 요청"""

    reason: str = Field(..., min_length=1, description="역분개 사유")
    actor_id: str | None = Field(default=None, description="기록자")
    reversal_date: date | None = Field(default=None, description="역분개 거래일 (기본: 오늘)")
