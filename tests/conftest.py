"""
pytest 공통 fixture 정의

설정 파일, 임시 디렉토리, Settings 싱글턴 초기화
"""

import tempfile
from pathlib import Path

import pytest

from core.config.loader import Settings


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def reset_settings():
    """Settings 싱글턴 초기화 (테스트 전후)"""
    Settings.reset()
    yield
    Settings.reset()


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성 (development 모드)"""
    settings_content = """# 테스트용 settings.yaml
mode: development

web:
  host: 0.0.0.0
  port: 9000
"""
    settings_path = temp_dir / "settings.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def temp_settings_file_production(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성 (production 모드, web 섹션 없음)"""
    settings_content = """mode: production
"""
    settings_path = temp_dir / "settings_prod.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def temp_settings_file_with_db(temp_dir: Path) -> Path:
    """database.path 지정된 settings.yaml"""
    db_path = temp_dir / "custom" / "ledger.db"
    settings_content = f"""mode: development

database:
  path: "{db_path.as_posix()}"
"""
    settings_path = temp_dir / "settings_db.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def temp_settings_file_invalid_mode(temp_dir: Path) -> Path:
    """잘못된 모드의 settings.yaml 파일 생성"""
    settings_content = """mode: invalid_mode
"""
    settings_path = temp_dir / "settings_invalid.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path
