import logging
import os
from typing import Any, Dict

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://openapi.naver.com"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


# 설정 로드
def load_config() -> Dict[str, Any]:
    """환경 변수에서 애플리케이션 설정을 로드해 반환"""
    # MCP 호스트가 env 로 인증 정보를 넘긴 경우 .env 를 읽지 않는다
    if not os.getenv("NAVER_CLIENT_ID") or not os.getenv("NAVER_CLIENT_SECRET"):
        load_dotenv()

    return {
        "NAVER_CLIENT_ID": os.getenv("NAVER_CLIENT_ID", ""),
        "NAVER_CLIENT_SECRET": os.getenv("NAVER_CLIENT_SECRET", ""),
        "NAVER_API_BASE_URL": os.getenv("NAVER_API_BASE_URL", DEFAULT_BASE_URL),
        "REQUEST_TIMEOUT": float(os.getenv("REQUEST_TIMEOUT", "30.0")),
        "USER_AGENT": os.getenv("USER_AGENT", "naver-insight-mcp/2.0"),
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO").upper(),
        "LOG_FILE": os.getenv("LOG_FILE", "naver_mcp.log"),
        "DEBUG_LOG": _env_flag("DEBUG_LOG", "False"),
        "DEBUG_LOG_DIR": os.getenv("DEBUG_LOG_DIR", "debug_logs"),
    }


def configure_logging(config: Dict[str, Any]) -> None:
    """
    로깅 설정

    stdio 트랜스포트가 stdout 을 사용하므로 콘솔 출력은 stderr 로만 보낸다.
    """
    handlers = [logging.StreamHandler()]
    if config.get("LOG_FILE"):
        handlers.insert(0, logging.FileHandler(config["LOG_FILE"], encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, config.get("LOG_LEVEL", "INFO"), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )
