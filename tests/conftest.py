"""테스트 공통 픽스처"""

import httpx
import pytest

from naver_insight_mcp.client import NaverApiClient


class RecordingTransport(httpx.MockTransport):
    """보낸 요청을 기록하는 목 트랜스포트"""

    def __init__(self, handler):
        self.requests = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def make_client():
    """핸들러를 받아 (클라이언트, 트랜스포트) 를 만드는 팩토리"""

    def _make(handler):
        transport = RecordingTransport(handler)
        client = NaverApiClient("test-id", "test-secret", transport=transport)
        return client, transport

    return _make


@pytest.fixture
def shopping_payload():
    return {
        "lastBuildDate": "Mon, 19 Oct 2026 10:00:00 +0900",
        "total": 532,
        "start": 1,
        "display": 2,
        "items": [
            {"title": "A", "link": "l1", "description": "d1", "lprice": 10000},
            {"title": "B", "link": "l2", "description": "d2", "lprice": 20000, "hprice": 25000},
        ],
    }


@pytest.fixture
def trend_payload():
    return {
        "startDate": "2024-01-01",
        "endDate": "2024-03-31",
        "timeUnit": "month",
        "results": [
            {
                "title": "패션의류",
                "category": ["50000000"],
                "data": [
                    {"period": "2024-01-01", "ratio": 100},
                    {"period": "2024-02-01", "ratio": 87.456},
                    {"period": "2024-03-01", "ratio": 91.2},
                ],
            },
            {
                "title": "화장품/미용",
                "category": ["50000002"],
                "data": [
                    {"period": "2024-01-01", "ratio": 45.1},
                    {"period": "2024-02-01", "ratio": 50.25},
                    {"period": "2024-03-01", "ratio": 48},
                ],
            },
        ],
    }
