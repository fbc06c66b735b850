"""request_builder 모듈의 유닛 테스트"""

import json

import pytest

from naver_insight_mcp.request_builder import build_request
from naver_insight_mcp.schemas import (
    CategoryBreakdownRequest,
    CategoryTrendRequest,
    EncyclopediaSearchRequest,
    KeywordBreakdownRequest,
    KeywordTrendRequest,
    ShoppingSearchRequest,
    validate_arguments,
)

PERIOD = {"start_date": "2024-01-01", "end_date": "2024-01-31", "time_unit": "month"}
GROUPS = [
    {"name": "패션의류", "param": ["50000000"]},
    {"name": "화장품/미용", "param": ["50000002", "50000003"]},
    {"name": "식품", "param": ["50000008"]},
]


def _params(api_request):
    return dict(api_request.params)


class TestTrendRequests:
    """쇼핑인사이트 요청 생성"""

    @pytest.mark.parametrize("count", [1, 2, 3])
    def test_category_groups_as_single_json_param(self, count):
        groups = GROUPS[:count]
        request = validate_arguments(CategoryTrendRequest, {**PERIOD, "categories": groups})
        api_request = build_request(request, "category_trends")

        names = [name for name, _ in api_request.params]
        assert names.count("category") == 1
        assert json.loads(_params(api_request)["category"]) == groups

    def test_category_trend_layout(self):
        request = validate_arguments(CategoryTrendRequest, {**PERIOD, "categories": GROUPS[:1]})
        api_request = build_request(request, "category_trends")

        assert api_request.method == "GET"
        assert api_request.path == "/v1/datalab/shopping/categories"
        assert api_request.params == (
            ("startDate", "2024-01-01"),
            ("endDate", "2024-01-31"),
            ("timeUnit", "month"),
            ("category", '[{"name":"패션의류","param":["50000000"]}]'),
        )

    @pytest.mark.parametrize("endpoint, path", [
        ("category_device", "/v1/datalab/shopping/category/device"),
        ("category_gender", "/v1/datalab/shopping/category/gender"),
        ("category_age", "/v1/datalab/shopping/category/age"),
    ])
    def test_single_category_is_bare_string(self, endpoint, path):
        request = validate_arguments(CategoryBreakdownRequest, {**PERIOD, "category": "50000000"})
        api_request = build_request(request, endpoint)

        assert api_request.path == path
        assert _params(api_request)["category"] == "50000000"

    def test_keyword_trends(self):
        keywords = [{"name": "정장", "param": ["정장", "슈트"]}, {"name": "비지니스 캐주얼", "param": ["비지니스 캐주얼"]}]
        request = validate_arguments(KeywordTrendRequest, {**PERIOD, "category": "50000000", "keywords": keywords})
        api_request = build_request(request, "keyword_trends")
        params = _params(api_request)

        assert api_request.path == "/v1/datalab/shopping/category/keywords"
        assert params["category"] == "50000000"
        assert json.loads(params["keyword"]) == keywords

    def test_single_keyword_is_bare_string(self):
        request = validate_arguments(
            KeywordBreakdownRequest, {**PERIOD, "category": "50000000", "keyword": "정장"}
        )
        api_request = build_request(request, "keyword_age")

        assert api_request.path == "/v1/datalab/shopping/category/keyword/age"
        assert _params(api_request)["keyword"] == "정장"

    def test_optional_filters_in_declared_order(self):
        request = validate_arguments(
            CategoryBreakdownRequest,
            {**PERIOD, "category": "50000000", "ages": ["20", "30"], "gender": "f", "device": "pc"},
        )
        api_request = build_request(request, "category_device")

        assert [name for name, _ in api_request.params] == [
            "startDate", "endDate", "timeUnit", "category", "device", "gender", "ages",
        ]
        assert _params(api_request)["ages"] == '["20","30"]'

    def test_absent_filters_omitted(self):
        request = validate_arguments(CategoryBreakdownRequest, {**PERIOD, "category": "50000000", "gender": "m"})
        params = _params(build_request(request, "category_gender"))

        assert "device" not in params
        assert "ages" not in params
        assert params["gender"] == "m"


class TestSearchRequests:
    """검색 요청 생성"""

    def test_shopping_defaults_and_omission(self):
        request = validate_arguments(ShoppingSearchRequest, {"query": "lipstick", "display": 2, "start": 1, "sort": "sim"})
        api_request = build_request(request, "shopping")

        assert api_request.path == "/v1/search/shop.json"
        assert api_request.params == (
            ("query", "lipstick"),
            ("display", "2"),
            ("start", "1"),
            ("sort", "sim"),
        )

    def test_shopping_filter_and_exclude(self):
        request = validate_arguments(
            ShoppingSearchRequest,
            {"query": "노트북", "filter": "naverpay", "exclude": "used:cbshop"},
        )
        params = _params(build_request(request, "shopping"))

        assert params["filter"] == "naverpay"
        assert params["exclude"] == "used:cbshop"

    def test_encyclopedia_has_no_sort(self):
        request = validate_arguments(EncyclopediaSearchRequest, {"query": "광합성", "sort": "date"})
        api_request = build_request(request, "encyclopedia")

        assert api_request.path == "/v1/search/encyc.json"
        assert [name for name, _ in api_request.params] == ["query", "display", "start"]

    def test_deterministic(self):
        request = validate_arguments(ShoppingSearchRequest, {"query": "립스틱", "exclude": "rental"})

        assert build_request(request, "shopping") == build_request(request, "shopping")

    def test_unknown_endpoint(self):
        request = validate_arguments(ShoppingSearchRequest, {"query": "q"})

        with pytest.raises(ValueError):
            build_request(request, "news")
