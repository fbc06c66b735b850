"""
MCP 통신 디버그 로그 모듈
도구 호출 요청/응답과 네이버 API 와의 통신 내용을 JSON 한 줄씩 기록한다
"""

import json
import logging
import os
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from .config import LOG_FORMAT

debug_logger = logging.getLogger("naver_debug")

SECRET_HEADERS = ("X-Naver-Client-Secret",)


def setup_debug_logging(log_dir: str = "debug_logs") -> str:
    """
    디버그 로그 핸들러 설정 (하루에 파일 하나)

    Returns:
        로그 파일 경로
    """
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, f"naver_debug_{datetime.now().strftime('%Y%m%d')}.log")

    debug_logger.setLevel(logging.DEBUG)
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    debug_logger.addHandler(file_handler)
    return log_file


def _dumps(data: Dict[str, Any]) -> str:
    return json.dumps(data, ensure_ascii=False, default=str)


def log_tool_request(tool_name: str, params: Any) -> str:
    """
    MCP 클라이언트가 보낸 도구 호출 기록

    Returns:
        이후 로그를 묶기 위한 요청 ID
    """
    request_id = uuid.uuid4().hex
    debug_logger.debug("[REQUEST] %s", _dumps({
        "request_id": request_id,
        "timestamp": datetime.now().isoformat(),
        "tool": tool_name,
        "params": params,
    }))
    return request_id


def log_api_request(request_id: Optional[str], url: str, params: Any, headers: Dict[str, str]):
    """네이버 API 로 보내는 요청 기록 (시크릿 헤더는 가림)"""
    safe_headers = dict(headers)
    for name in SECRET_HEADERS:
        if name in safe_headers:
            safe_headers[name] = "[REDACTED]"

    debug_logger.debug("[API_REQUEST] %s", _dumps({
        "request_id": request_id,
        "timestamp": datetime.now().isoformat(),
        "url": url,
        "params": params,
        "headers": safe_headers,
    }))


def log_api_response(request_id: Optional[str], status_code: Optional[int], response_length: int, error=None):
    """네이버 API 응답 기록"""
    log_data = {
        "request_id": request_id,
        "timestamp": datetime.now().isoformat(),
        "status_code": status_code,
        "response_length": response_length,
    }
    if error:
        log_data["error"] = str(error)
        debug_logger.error("[API_RESPONSE] %s", _dumps(log_data))
    else:
        debug_logger.debug("[API_RESPONSE] %s", _dumps(log_data))


def log_tool_response(request_id: str, text: str, is_error: bool):
    """MCP 클라이언트로 돌려주는 결과 기록"""
    debug_logger.debug("[RESPONSE] %s", _dumps({
        "request_id": request_id,
        "timestamp": datetime.now().isoformat(),
        "is_error": is_error,
        "text_length": len(text),
        "full_response": text,
    }))
