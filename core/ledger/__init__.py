"""
복식부기 (Double-Entry Bookkeeping) Ledger

business별 계정과목표, 분개 기록, 역분개를 담당.
계정 잔액은 이 패키지의 분개 경로에서만 변경됨.

사용 예시:
```python
from core.ledger import JournalLine, LedgerService, LedgerStore

service = LedgerService(LedgerStore(db))
await service.seed_chart_of_accounts("demo-business")

tx = await service.post_journal_entry(
    business_id="demo-business",
    transaction_date=date(2026, 1, 5),
    description="Owner investment",
    reference=None,
    lines=[
        JournalLine(cash_id, debit_amount=Decimal("1000")),
        JournalLine(equity_id, credit_amount=Decimal("1000")),
    ],
)

# 역분개
await service.reverse_transaction(tx.transaction_id, reason="Entered twice")
```
"""

from core.ledger.errors import (
    AccountNotFoundError,
    AlreadyReversedError,
    DuplicateAccountCodeError,
    EmptyEntryError,
    ImbalancedEntryError,
    InvalidAmountError,
    InvalidEntryError,
    LedgerError,
    TransactionNotFoundError,
    UnknownOrInactiveAccountError,
)
from core.ledger.models import Account, JournalLine, Transaction, TransactionLine
from core.ledger.schema import init_ledger_schema
from core.ledger.service import LedgerService
from core.ledger.store import LedgerStore
from core.ledger.types import (
    DEFAULT_CHART_OF_ACCOUNTS,
    AccountType,
    TransactionType,
    sign_for,
)

__all__ = [
    # 핵심 클래스
    "LedgerService",
    "LedgerStore",
    "init_ledger_schema",
    # 모델
    "Account",
    "JournalLine",
    "Transaction",
    "TransactionLine",
    # Enum / 규칙
    "AccountType",
    "TransactionType",
    "sign_for",
    "DEFAULT_CHART_OF_ACCOUNTS",
    # 예외
    "LedgerError",
    "InvalidEntryError",
    "ImbalancedEntryError",
    "EmptyEntryError",
    "UnknownOrInactiveAccountError",
    "InvalidAmountError",
    "TransactionNotFoundError",
    "AlreadyReversedError",
    "DuplicateAccountCodeError",
    "AccountNotFoundError",
]
