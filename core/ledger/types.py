"""
복식부기 타입 정의

AccountType, TransactionType 등 Ledger 시스템에서 사용하는 Enum 정의
"""

from enum import Enum


class AccountType(str, Enum):
    """계정 유형

    복식부기의 5대 계정 유형.
    ASSET/EXPENSE는 차변 정상(debit-normal),
    LIABILITY/EQUITY/INCOME은 대변 정상(credit-normal).
    """

    ASSET = "asset"  # 자산 (현금, 매출채권, 재고)
    LIABILITY = "liability"  # 부채 (매입채무, 차입금)
    EQUITY = "equity"  # 자본 (출자금, 이익잉여금)
    INCOME = "income"  # 수익 (매출, 용역수익)
    EXPENSE = "expense"  # 비용 (매출원가, 급여)


class TransactionType(str, Enum):
    """분개 거래 유형

    str을 상속하여 JSON 직렬화 가능.
    """

    MANUAL_JOURNAL = "manual_journal"  # 수동 분개 (역분개 포함)
    INCOME = "income"  # 수익 입금
    EXPENSE = "expense"  # 비용 지출
    INVOICE = "invoice"  # 청구서 발행
    INVOICE_PAYMENT = "invoice_payment"  # 청구서 수금
    OPENING_BALANCE = "opening_balance"  # 기초 잔액


DEBIT_NORMAL_TYPES: frozenset[AccountType] = frozenset({
    AccountType.ASSET,
    AccountType.EXPENSE,
})


def sign_for(account_type: AccountType | str) -> int:
    """계정 유형별 잔액 부호

    잔액 변동 = sign_for(유형) * (차변 - 대변)

    Args:
        account_type: 계정 유형 (Enum 또는 문자열 값)

    Returns:
        +1 (차변 정상: asset, expense) 또는 -1 (대변 정상: liability, equity, income)

    Raises:
        ValueError: 알 수 없는 계정 유형
    """
    return 1 if AccountType(account_type) in DEBIT_NORMAL_TYPES else -1


# 기본 계정과목표 (seed_chart_of_accounts에서 사용)
DEFAULT_CHART_OF_ACCOUNTS: list[tuple[str, str, str, str]] = [
    # (code, name, account_type, description)

    # ASSET
    ("1000", "Cash and Cash Equivalents", "asset", "Petty cash, checking accounts, and savings accounts"),
    ("1100", "Accounts Receivable", "asset", "Money owed to the business by customers"),
    ("1200", "Inventory", "asset", "Raw materials and finished goods"),
    ("1300", "Prepaid Expenses", "asset", "Expenses paid in advance"),
    ("1400", "Fixed Assets", "asset", "Property, plant and equipment"),

    # LIABILITY
    ("2000", "Accounts Payable", "liability", "Money owed to suppliers and vendors"),
    ("2100", "Accrued Expenses", "liability", "Expenses incurred but not yet paid"),
    ("2200", "Short-term Loans", "liability", "Borrowings due within one year"),

    # EQUITY
    ("3000", "Owner's Equity", "equity", "Owner's investment in the business"),
    ("3100", "Retained Earnings", "equity", "Accumulated profits kept in the business"),

    # INCOME
    ("4000", "Sales Revenue", "income", "Revenue from primary business operations"),
    ("4100", "Service Revenue", "income", "Revenue from services provided"),
    ("4200", "Interest Income", "income", "Interest earned on deposits"),

    # EXPENSE
    ("5000", "Cost of Goods Sold", "expense", "Direct cost of goods sold"),
    ("5100", "Salaries and Wages", "expense", "Employee compensation"),
    ("5200", "Rent Expense", "expense", "Office and facility rent"),
]
