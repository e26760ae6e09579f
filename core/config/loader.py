"""
설정 로더

settings.yaml 로드 및 실행 설정 생성
"""

from dataclasses import dataclass
from pathlib import Path

import yaml

from core.constants import Defaults, Paths
from core.types import AppMode


@dataclass(frozen=True)
class WebConfig:
    """Web 서버 설정"""

    host: str
    port: int


@dataclass(frozen=True)
class AppSettings:
    """애플리케이션 설정 (settings.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    mode: AppMode
    web: WebConfig
    db_path_override: Path | None = None


class SettingsLoadError(Exception):
    """Settings 로드 실패 예외"""

    pass


def load_settings(path: Path | None = None) -> AppSettings:
    """settings.yaml 파일 로드

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        AppSettings 인스턴스

    Raises:
        SettingsLoadError: 파일이 없거나 형식이 잘못된 경우
        ValueError: 유효하지 않은 mode인 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        raise SettingsLoadError(f"settings.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SettingsLoadError("settings.yaml이 비어 있습니다")

    if not isinstance(data, dict):
        raise SettingsLoadError("settings.yaml 최상위는 매핑이어야 합니다")

    # mode 검증
    mode_str = data.get("mode")
    if mode_str is None:
        raise SettingsLoadError("settings.yaml에 'mode' 필드가 없습니다")

    try:
        mode = AppMode(mode_str)
    except ValueError as e:
        valid_modes = [m.value for m in AppMode]
        raise ValueError(
            f"유효하지 않은 mode입니다: '{mode_str}'. "
            f"유효한 값: {valid_modes}"
        ) from e

    # web 섹션은 선택 (없으면 기본값)
    web_config = data.get("web") or {}
    try:
        port = int(web_config.get("port", Defaults.WEB_PORT))
    except (TypeError, ValueError) as e:
        raise SettingsLoadError(
            f"settings.yaml의 web.port가 올바르지 않습니다: {web_config.get('port')}"
        ) from e

    web = WebConfig(
        host=str(web_config.get("host", Defaults.WEB_HOST)),
        port=port,
    )

    # database.path 는 선택 (테스트/배포 환경에서 경로 지정)
    db_config = data.get("database") or {}
    db_path = db_config.get("path")

    return AppSettings(
        mode=mode,
        web=web,
        db_path_override=Path(db_path) if db_path else None,
    )


def get_db_path(settings: AppSettings) -> Path:
    """모드에 따른 DB 경로 반환

    Args:
        settings: AppSettings 인스턴스

    Returns:
        DB 파일 경로 (Path 타입)
    """
    if settings.db_path_override is not None:
        return settings.db_path_override
    if settings.mode == AppMode.PRODUCTION:
        return Paths.PROD_DB
    else:
        return Paths.DEV_DB


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _settings: AppSettings | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._settings is None:
            type(self)._settings = load_settings(settings_path)

    @property
    def mode(self) -> AppMode:
        """현재 실행 모드"""
        assert self._settings is not None
        return self._settings.mode

    @property
    def web(self) -> WebConfig:
        """Web 서버 설정"""
        assert self._settings is not None
        return self._settings.web

    @property
    def db_path(self) -> Path:
        """현재 모드의 DB 경로"""
        assert self._settings is not None
        return get_db_path(self._settings)

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._settings = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
