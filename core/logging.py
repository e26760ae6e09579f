"""
로깅 설정 유틸리티

Web 프로세스와 스크립트가 공유하는 로깅 설정.
- 콘솔 + 일별 롤링 파일 (TimedRotatingFileHandler)
- extra=로 전달된 Ledger 문맥(business_id, transaction_id 등)을 줄 끝에 덧붙임

사용법:
    from core.logging import setup_logging
    setup_logging("web")

    logger.info("Posted", extra={"business_id": "biz-1", "transaction_id": tx_id})
    # ... | core.ledger.service | Posted | business_id=biz-1 transaction_id=...
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from core.constants import Paths


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BACKUP_COUNT = 7  # 7일치 보관

# 로그 줄 끝에 붙는 extra 필드 (순서 유지)
CONTEXT_FIELDS = (
    "business_id",
    "transaction_id",
    "amount",
    "reason",
    "db_path",
)

# WARNING 이상만 남길 라이브러리 로거
NOISY_LOGGERS = [
    "aiosqlite",      # 쿼리마다 executing/completed
    "httpcore",
    "httpx",
    "asyncio",
    "uvicorn.access", # 요청별 access 로그
]


class LedgerContextFormatter(logging.Formatter):
    """extra 문맥 필드를 `key=value` 형태로 덧붙이는 Formatter"""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = " ".join(
            f"{name}={getattr(record, name)}"
            for name in CONTEXT_FIELDS
            if getattr(record, name, None) is not None
        )
        return f"{line} | {context}" if context else line


def setup_logging(
    process_name: str,
    console_level: int = logging.INFO,
    file_level: int = logging.INFO,
    log_dir: Path | None = None,
) -> logging.Logger:
    """루트 로거 초기화

    기존 루트 핸들러는 닫고 교체하므로 여러 번 호출해도 중복 출력 없음.

    Args:
        process_name: 프로세스 이름 (로그 파일명)
        console_level: 콘솔 핸들러 레벨
        file_level: 파일 핸들러 레벨
        log_dir: 로그 디렉토리 (None이면 Paths.LOGS_DIR)

    Returns:
        루트 Logger
    """
    log_file = get_log_file_path(process_name, log_dir)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # 필터링은 핸들러 레벨에서

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = LedgerContextFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # 매일 자정 롤링, 백업 파일명: web.log.2026-02-21
    file_handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        interval=1,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.suffix = "%Y-%m-%d"
    file_handler.setLevel(file_level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.info(f"로깅 초기화 완료: {process_name} → {log_file}")
    return root_logger


def get_log_file_path(process_name: str, log_dir: Path | None = None) -> Path:
    """로그 파일 경로 (<log_dir>/<process_name>.log)"""
    base_dir = log_dir if log_dir is not None else Paths.LOGS_DIR
    return base_dir / f"{process_name}.log"
