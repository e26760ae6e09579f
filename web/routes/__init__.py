"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- accounts: 계정과목표
- transactions: 분개 기록/조회/역분개
"""
