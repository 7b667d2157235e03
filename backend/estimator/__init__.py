"""작업 유형 기반 프로젝트 시간 견적 서비스."""

__version__ = "1.0.0"
