"""
도구 레지스트리

도구 이름마다 (검증 스키마, 엔드포인트, 응답 포맷터) 를 묶고,
검증 → 요청 생성 → API 호출 → 포맷팅 순서로 도구 호출 하나를 처리한다.
"""

import logging
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, Type

from pydantic import BaseModel

from . import schemas
from .client import NaverApiClient
from .debug_logger import log_tool_request, log_tool_response
from .errors import ConfigurationError, NaverMcpError
from .formatters import (
    format_encyclopedia_response,
    format_search_response,
    format_shopping_response,
    format_trend_response,
)
from .request_builder import build_request

logger = logging.getLogger(__name__)

ERROR_PREFIX = "오류 발생: "


@dataclass(frozen=True)
class ToolSpec:
    name: str
    schema: Type[BaseModel]
    endpoint: str
    response_model: Type[BaseModel]
    formatter: Callable[[Any], str]

    def render(self, payload: Any) -> str:
        return self.formatter(schemas.parse_response(self.response_model, payload))


@dataclass(frozen=True)
class ToolResult:
    """도구 호출 결과 (텍스트 + 오류 여부)"""

    text: str
    is_error: bool = False


def _trend_tool(name: str, schema: Type[BaseModel], endpoint: str) -> ToolSpec:
    return ToolSpec(name, schema, endpoint, schemas.TrendResponse, format_trend_response)


TOOLS: Dict[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        _trend_tool("get-category-trends", schemas.CategoryTrendRequest, "category_trends"),
        _trend_tool("get-category-by-device", schemas.CategoryBreakdownRequest, "category_device"),
        _trend_tool("get-category-by-gender", schemas.CategoryBreakdownRequest, "category_gender"),
        _trend_tool("get-category-by-age", schemas.CategoryBreakdownRequest, "category_age"),
        _trend_tool("get-keyword-trends", schemas.KeywordTrendRequest, "keyword_trends"),
        _trend_tool("get-keyword-by-device", schemas.KeywordBreakdownRequest, "keyword_device"),
        _trend_tool("get-keyword-by-gender", schemas.KeywordBreakdownRequest, "keyword_gender"),
        _trend_tool("get-keyword-by-age", schemas.KeywordBreakdownRequest, "keyword_age"),
        ToolSpec(
            "search-blog",
            schemas.BlogSearchRequest,
            "blog",
            schemas.SearchResponse,
            partial(format_search_response, "블로그"),
        ),
        ToolSpec(
            "search-kin",
            schemas.KinSearchRequest,
            "kin",
            schemas.SearchResponse,
            partial(format_search_response, "지식iN"),
        ),
        ToolSpec(
            "search-shopping",
            schemas.ShoppingSearchRequest,
            "shopping",
            schemas.ShoppingSearchResponse,
            format_shopping_response,
        ),
        ToolSpec(
            "search-encyclopedia",
            schemas.EncyclopediaSearchRequest,
            "encyclopedia",
            schemas.EncyclopediaSearchResponse,
            format_encyclopedia_response,
        ),
    )
}


async def call_tool(name: str, arguments: Any, client: NaverApiClient) -> ToolResult:
    """
    도구 호출 하나를 처리

    검증 실패와 네이버 API/네트워크 오류는 예외로 전파하지 않고
    is_error=True 인 결과로 돌려준다.

    Args:
        name: 도구 이름 (예: search-shopping)
        arguments: MCP 클라이언트가 보낸 인자
        client: 네이버 API 클라이언트

    Returns:
        ToolResult: 응답 텍스트와 오류 여부
    """
    request_id = log_tool_request(name, arguments)

    tool = TOOLS.get(name)
    if tool is None:
        result = ToolResult(f"{ERROR_PREFIX}알 수 없는 도구입니다: {name}", is_error=True)
        log_tool_response(request_id, result.text, result.is_error)
        return result

    try:
        request = schemas.validate_arguments(tool.schema, arguments)
        api_request = build_request(request, tool.endpoint)
        payload = await client.get(api_request, request_id=request_id)
        result = ToolResult(tool.render(payload))
    except ConfigurationError:
        raise
    except NaverMcpError as e:
        logger.warning(f"{name} 실패: {str(e)}")
        result = ToolResult(f"{ERROR_PREFIX}{str(e)}", is_error=True)

    log_tool_response(request_id, result.text, result.is_error)
    return result
