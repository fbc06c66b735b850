"""registry 모듈 (도구 호출 파이프라인) 테스트"""

import asyncio
import json

import httpx
import pytest

from naver_insight_mcp import registry
from naver_insight_mcp.client import NaverApiClient
from naver_insight_mcp.errors import ConfigurationError
from naver_insight_mcp.registry import TOOLS, call_tool

TOOL_NAMES = {
    "get-category-trends",
    "get-category-by-device",
    "get-category-by-gender",
    "get-category-by-age",
    "get-keyword-trends",
    "get-keyword-by-device",
    "get-keyword-by-gender",
    "get-keyword-by-age",
    "search-blog",
    "search-kin",
    "search-shopping",
    "search-encyclopedia",
}


def test_registered_tools():
    assert set(TOOLS) == TOOL_NAMES


class TestCallTool:
    """call_tool 테스트"""

    @pytest.mark.asyncio
    async def test_shopping_search(self, make_client, shopping_payload):
        client, transport = make_client(lambda request: httpx.Response(200, json=shopping_payload))

        result = await call_tool(
            "search-shopping",
            {"query": "lipstick", "display": 2, "start": 1, "sort": "sim"},
            client,
        )

        assert result.is_error is False
        assert "총 검색 결과: 532개" in result.text
        assert "조회 범위: 1 ~ 2" in result.text
        assert "가격: 10,000원\n" in result.text
        assert "가격: 20,000원 ~ 25,000원\n" in result.text
        assert transport.requests[0].url.path == "/v1/search/shop.json"

    @pytest.mark.asyncio
    async def test_upstream_error_is_flagged(self, make_client):
        client, _ = make_client(lambda request: httpx.Response(400, text='{"error":"bad param"}'))

        result = await call_tool("search-blog", {"query": "캠핑"}, client)

        assert result.is_error is True
        assert result.text.startswith("오류 발생: ")
        assert "400" in result.text
        assert '{"error":"bad param"}' in result.text

    @pytest.mark.asyncio
    async def test_validation_error_skips_network(self, make_client):
        client, transport = make_client(lambda request: httpx.Response(200, json={}))

        result = await call_tool("search-kin", {"query": "", "display": 101}, client)

        assert result.is_error is True
        assert "query" in result.text
        assert "display" in result.text
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_transport_error_is_flagged(self, make_client):
        def handler(request):
            raise httpx.ConnectError("name resolution failed", request=request)

        client, _ = make_client(handler)

        result = await call_tool("search-encyclopedia", {"query": "광합성"}, client)

        assert result.is_error is True
        assert "name resolution failed" in result.text

    @pytest.mark.asyncio
    async def test_malformed_response_is_flagged(self, make_client):
        client, _ = make_client(lambda request: httpx.Response(200, json={"unexpected": True}))

        result = await call_tool(
            "get-category-by-age",
            {"start_date": "2024-01-01", "end_date": "2024-01-31", "time_unit": "month", "category": "50000000"},
            client,
        )

        assert result.is_error is True
        assert "응답 형식" in result.text

    @pytest.mark.asyncio
    async def test_unknown_tool(self, make_client):
        client, transport = make_client(lambda request: httpx.Response(200, json={}))

        result = await call_tool("search-news", {"query": "q"}, client)

        assert result.is_error is True
        assert "search-news" in result.text
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_category_trends(self, make_client, trend_payload):
        client, transport = make_client(lambda request: httpx.Response(200, json=trend_payload))
        groups = [{"name": "패션의류", "param": ["50000000"]}, {"name": "화장품/미용", "param": ["50000002"]}]

        result = await call_tool(
            "get-category-trends",
            {"start_date": "2024-01-01", "end_date": "2024-03-31", "time_unit": "month", "categories": groups},
            client,
        )

        assert result.is_error is False
        assert "항목: 패션의류" in result.text
        sent = transport.requests[0]
        assert sent.url.path == "/v1/datalab/shopping/categories"
        assert json.loads(sent.url.params["category"]) == groups

    @pytest.mark.asyncio
    async def test_keyword_breakdown(self, make_client):
        payload = {
            "startDate": "2024-01-01",
            "endDate": "2024-01-31",
            "timeUnit": "month",
            "results": [{
                "title": "정장",
                "keyword": ["정장"],
                "data": [
                    {"period": "2024-01-01", "ratio": 40, "group": "f"},
                    {"period": "2024-01-01", "ratio": 100, "group": "m"},
                ],
            }],
        }
        client, transport = make_client(lambda request: httpx.Response(200, json=payload))

        result = await call_tool(
            "get-keyword-by-gender",
            {"startDate": "2024-01-01", "endDate": "2024-01-31", "timeUnit": "month",
             "category": "50000000", "keyword": "정장"},
            client,
        )

        assert result.is_error is False
        assert "  - 2024-01-01: 40.00 (f)" in result.text
        sent = transport.requests[0]
        assert sent.url.path == "/v1/datalab/shopping/category/keyword/gender"
        assert sent.url.params["keyword"] == "정장"

    @pytest.mark.asyncio
    async def test_concurrent_calls_are_independent(self, make_client):
        def handler(request):
            query = request.url.params["query"]
            return httpx.Response(200, json={
                "lastBuildDate": "now",
                "total": 1,
                "start": 1,
                "display": 1,
                "items": [{"title": f"{query} 결과", "link": f"https://blog/{query}", "description": query}],
            })

        client, _ = make_client(handler)

        first, second = await asyncio.gather(
            call_tool("search-blog", {"query": "캠핑"}, client),
            call_tool("search-blog", {"query": "낚시"}, client),
        )

        assert "[1] 캠핑 결과" in first.text
        assert "낚시" not in first.text
        assert "[1] 낚시 결과" in second.text
        assert "캠핑" not in second.text


def test_missing_credentials_fail_before_request_building(monkeypatch):
    """인증 정보가 없으면 요청 생성 전에 생성자에서 실패할 것"""
    calls = []
    monkeypatch.setattr(registry, "build_request", lambda *args: calls.append(args))

    with pytest.raises(ConfigurationError):
        NaverApiClient(None, None)

    assert calls == []
