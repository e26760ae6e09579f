"""
Ledger 예외 정의

모든 검증 오류는 LedgerError를 상속.
저장소(SQLite) 오류는 감싸지 않고 그대로 전파.
"""

from decimal import Decimal


class LedgerError(Exception):
    """Ledger 기본 예외"""

    pass


class InvalidEntryError(LedgerError):
    """분개 입력 형식 오류 (빈 business_id, 음수 금액 등)"""

    pass


class ImbalancedEntryError(LedgerError):
    """차변 합계 ≠ 대변 합계

    진단을 위해 양쪽 합계를 보관.
    """

    def __init__(self, total_debit: Decimal, total_credit: Decimal):
        self.total_debit = total_debit
        self.total_credit = total_credit
        super().__init__(
            f"Transaction does not balance. Debits: {total_debit}, Credits: {total_credit}"
        )


class EmptyEntryError(LedgerError):
    """합계가 0인 분개 (무의미한 분개 거부)"""

    def __init__(self, message: str = "Transaction must have at least one non-zero amount."):
        super().__init__(message)


class UnknownOrInactiveAccountError(LedgerError):
    """존재하지 않거나 비활성인 계정으로 분개 시도"""

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account with ID {account_id} not found or inactive.")


class InvalidAmountError(LedgerError):
    """수익/비용 편의 함수에 0 이하 금액 전달"""

    def __init__(self, amount: Decimal, message: str = "Amount must be greater than zero."):
        self.amount = amount
        super().__init__(f"{message} Got: {amount}")


class TransactionNotFoundError(LedgerError):
    """역분개 대상 거래 없음"""

    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction with ID {transaction_id} not found.")


class AlreadyReversedError(LedgerError):
    """이미 역분개된 거래"""

    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction {transaction_id} is already reversed.")


class DuplicateAccountCodeError(LedgerError):
    """같은 business 내 계정 코드 중복"""

    def __init__(self, business_id: str, code: str):
        self.business_id = business_id
        self.code = code
        super().__init__(f"Account code {code} already exists for business {business_id}.")


class AccountNotFoundError(LedgerError):
    """수정/비활성화 대상 계정 없음 (또는 다른 business 소속)"""

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account with ID {account_id} not found.")
