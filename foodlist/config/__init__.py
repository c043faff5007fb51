"""설정 패키지입니다. 로거와 Config 클래스를 노출합니다."""
from .config import Config, logger

__all__ = ["Config", "logger"]
