"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    AccountCreateRequest,
    AccountUpdateRequest,
    ExpenseCreateRequest,
    IncomeCreateRequest,
    JournalEntryCreateRequest,
    JournalLineRequest,
    ReverseTransactionRequest,
)
from web.models.responses import (
    AccountListResponse,
    AccountResponse,
    HealthResponse,
    TransactionLineResponse,
    TransactionListResponse,
    TransactionResponse,
)

__all__ = [
    # Requests
    "AccountCreateRequest",
    "AccountUpdateRequest",
    "JournalLineRequest",
    "JournalEntryCreateRequest",
    "IncomeCreateRequest",
    "ExpenseCreateRequest",
    "ReverseTransactionRequest",
    # Responses
    "HealthResponse",
    "AccountResponse",
    "AccountListResponse",
    "TransactionLineResponse",
    "TransactionResponse",
    "TransactionListResponse",
]
