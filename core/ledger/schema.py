"""
복식부기 스키마 초기화

Web 시작 시 자동으로 Ledger 테이블 생성.
CREATE IF NOT EXISTS 패턴으로 안전하게 동작.
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


async def init_ledger_schema(db: "SQLiteAdapter") -> None:
    """Ledger 스키마 초기화

    이미 존재하는 경우 안전하게 건너뜀 (IF NOT EXISTS).

    Args:
        db: SQLiteAdapter 인스턴스
    """
    await _create_ledger_tables(db)
    logger.info("Ledger 스키마 초기화 완료")


async def _create_ledger_tables(db: "SQLiteAdapter") -> None:
    """Ledger 테이블 생성

    금액 컬럼은 Decimal 문자열(TEXT)로 저장.
    """

    # account 테이블
    await db.execute("""
        CREATE TABLE IF NOT EXISTS account (
            account_id       TEXT PRIMARY KEY,
            business_id      TEXT NOT NULL,
            code             TEXT NOT NULL,
            name             TEXT NOT NULL,
            account_type     TEXT NOT NULL,
            balance          TEXT NOT NULL DEFAULT '0',
            is_active        INTEGER NOT NULL DEFAULT 1,
            description      TEXT,
            created_at       TEXT NOT NULL DEFAULT (datetime('now')),
            updated_at       TEXT NOT NULL DEFAULT (datetime('now')),
            UNIQUE(business_id, code)
        )
    """)

    # ledger_transaction 테이블 (분개 헤더)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS ledger_transaction (
            transaction_id             TEXT PRIMARY KEY,
            business_id                TEXT NOT NULL,
            transaction_number         TEXT NOT NULL,
            transaction_date           TEXT NOT NULL,
            description                TEXT NOT NULL,
            reference                  TEXT,
            transaction_type           TEXT NOT NULL,
            is_reversed                INTEGER NOT NULL DEFAULT 0,
            reversed_by_transaction_id TEXT,
            created_by                 TEXT,
            created_at                 TEXT NOT NULL DEFAULT (datetime('now')),
            updated_at                 TEXT NOT NULL DEFAULT (datetime('now')),
            UNIQUE(business_id, transaction_number)
        )
    """)

    # transaction_line 테이블 (분개 항목)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS transaction_line (
            line_id          TEXT PRIMARY KEY,
            transaction_id   TEXT NOT NULL,
            account_id       TEXT NOT NULL,
            debit_amount     TEXT NOT NULL DEFAULT '0',
            credit_amount    TEXT NOT NULL DEFAULT '0',
            description      TEXT,
            line_order       INTEGER NOT NULL DEFAULT 0,
            created_at       TEXT NOT NULL DEFAULT (datetime('now')),
            FOREIGN KEY (transaction_id) REFERENCES ledger_transaction(transaction_id),
            FOREIGN KEY (account_id) REFERENCES account(account_id)
        )
    """)

    # 인덱스 생성
    await db.execute("CREATE INDEX IF NOT EXISTS idx_account_business ON account(business_id)")
    await db.execute("CREATE INDEX IF NOT EXISTS idx_account_type ON account(account_type)")
    await db.execute("CREATE INDEX IF NOT EXISTS idx_transaction_business ON ledger_transaction(business_id)")
    await db.execute("CREATE INDEX IF NOT EXISTS idx_transaction_date ON ledger_transaction(transaction_date)")
    await db.execute("CREATE INDEX IF NOT EXISTS idx_transaction_line_tx ON transaction_line(transaction_id)")
    await db.execute("CREATE INDEX IF NOT EXISTS idx_transaction_line_account ON transaction_line(account_id)")

    await db.commit()
    logger.debug("Ledger 테이블 생성 완료")
