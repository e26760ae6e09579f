"""
core/types.py 테스트

AppMode가 문자열 직렬화 가능한지 확인
"""

import pytest

from core.types import AppMode


class TestAppMode:
    """AppMode 테스트"""

    def test_values(self) -> None:
        """값 확인"""
        assert AppMode.PRODUCTION.value == "production"
        assert AppMode.DEVELOPMENT.value == "development"

    def test_from_string(self) -> None:
        """문자열에서 생성"""
        assert AppMode("development") is AppMode.DEVELOPMENT

    def test_str_comparison(self) -> None:
        """str 상속 확인"""
        assert AppMode.PRODUCTION == "production"

    def test_invalid(self) -> None:
        with pytest.raises(ValueError):
            AppMode("testnet")
