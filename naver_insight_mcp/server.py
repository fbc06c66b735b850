import logging
import sys
from typing import Annotated, Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from .client import NaverApiClient
from .config import configure_logging, load_config
from .debug_logger import setup_debug_logging
from .errors import ConfigurationError
from .registry import ToolResult, call_tool
from .schemas import (
    DATE_PATTERN,
    MAX_CATEGORY_GROUPS,
    MAX_KEYWORD_GROUPS,
    AgeBand,
    BlogSort,
    Device,
    Gender,
    KinSort,
    NamedGroup,
    ShoppingFilter,
    ShoppingSort,
    TimeUnit,
)

logger = logging.getLogger(__name__)

SERVER_NAME = "네이버 API"

# categories 리소스가 조회하는 고정 분야
RESOURCE_CATEGORIES = [
    {"name": "패션의류", "param": ["50000000"]},
    {"name": "화장품/미용", "param": ["50000002"]},
]

API_GUIDE = """네이버 API MCP 서버를 통해 다음과 같은 정보를 조회할 수 있습니다:

[쇼핑인사이트 API]
1. 쇼핑인사이트 분야별 트렌드 조회
2. 쇼핑인사이트 분야 내 기기별/성별/연령별 트렌드 조회
3. 쇼핑인사이트 키워드별 트렌드 조회

[검색 API]
1. 블로그 검색
2. 지식iN 검색
3. 쇼핑 검색
4. 백과사전 검색

주요 카테고리 ID:
- 패션의류: 50000000
- 화장품/미용: 50000002
- 디지털/가전: 50000003
- 식품: 50000008
"""

# 도구 인자 타입. 공개 inputSchema 에 열거값과 범위가 그대로 드러나도록 선언한다
DateArg = Annotated[str, Field(pattern=DATE_PATTERN, description="YYYY-MM-DD")]
CategoryGroups = Annotated[List[NamedGroup], Field(min_length=1, max_length=MAX_CATEGORY_GROUPS)]
KeywordGroups = Annotated[List[NamedGroup], Field(min_length=1, max_length=MAX_KEYWORD_GROUPS)]
DisplayArg = Annotated[int, Field(ge=1, le=100, description="결과 개수")]
StartArg = Annotated[int, Field(ge=1, le=1000, description="검색 시작 위치")]


def _compact(**arguments: Any) -> Dict[str, Any]:
    # 전달되지 않은 선택 인자는 스키마 기본값을 쓰도록 뺀다
    return {key: value for key, value in arguments.items() if value is not None}


def _groups(groups: List[NamedGroup]) -> List[Dict[str, Any]]:
    return [group.model_dump() for group in groups]


def _unwrap(result: ToolResult) -> str:
    if result.is_error:
        raise ToolError(result.text)
    return result.text


def create_server(client: NaverApiClient) -> FastMCP:
    """
    네이버 API 도구, 리소스, 프롬프트를 등록한 MCP 서버 생성

    도구 인자 이름은 네이버 API 와 같은 camelCase(startDate, endDate, timeUnit) 를 쓴다.
    """
    mcp = FastMCP(SERVER_NAME)

    async def run(name: str, arguments: Dict[str, Any]) -> str:
        return _unwrap(await call_tool(name, arguments, client))

    # 분야별 트렌드 리소스
    @mcp.resource("naver-shopping-insight://categories/{start_date}/{end_date}/{time_unit}")
    async def categories(start_date: str, end_date: str, time_unit: str) -> str:
        """패션의류, 화장품/미용 분야의 쇼핑 트렌드"""
        result = await call_tool(
            "get-category-trends",
            {
                "start_date": start_date,
                "end_date": end_date,
                "time_unit": time_unit,
                "categories": RESOURCE_CATEGORIES,
            },
            client,
        )
        return result.text

    # ========== 쇼핑인사이트 도구 ==========

    @mcp.tool(name="get-category-trends")
    async def get_category_trends(
        startDate: DateArg,
        endDate: DateArg,
        timeUnit: TimeUnit,
        categories: CategoryGroups,
        device: Optional[Device] = None,
        gender: Optional[Gender] = None,
        ages: Optional[List[AgeBand]] = None,
    ) -> str:
        """
        쇼핑인사이트 분야별 트렌드 조회

        Args:
            startDate: 조회 시작일 (YYYY-MM-DD)
            endDate: 조회 종료일 (YYYY-MM-DD)
            timeUnit: 구간 단위 (date, week, month)
            categories: {name, param} 형태의 분야 그룹 (최대 3개)
            device: 기기 (pc, mobile, all)
            gender: 성별 (m, f, a)
            ages: 연령대 목록 (10, 20, 30, 40, 50, 60)
        """
        return await run("get-category-trends", _compact(
            startDate=startDate, endDate=endDate, timeUnit=timeUnit,
            categories=_groups(categories), device=device, gender=gender, ages=ages,
        ))

    @mcp.tool(name="get-category-by-device")
    async def get_category_by_device(
        startDate: DateArg,
        endDate: DateArg,
        timeUnit: TimeUnit,
        category: str,
        device: Optional[Device] = None,
        gender: Optional[Gender] = None,
        ages: Optional[List[AgeBand]] = None,
    ) -> str:
        """
        쇼핑인사이트 분야 내 기기별 트렌드 조회

        Args:
            category: 카테고리 ID (예: 50000000)
        """
        return await run("get-category-by-device", _compact(
            startDate=startDate, endDate=endDate, timeUnit=timeUnit,
            category=category, device=device, gender=gender, ages=ages,
        ))

    @mcp.tool(name="get-category-by-gender")
    async def get_category_by_gender(
        startDate: DateArg,
        endDate: DateArg,
        timeUnit: TimeUnit,
        category: str,
        device: Optional[Device] = None,
        gender: Optional[Gender] = None,
        ages: Optional[List[AgeBand]] = None,
    ) -> str:
        """
        쇼핑인사이트 분야 내 성별 트렌드 조회

        Args:
            category: 카테고리 ID (예: 50000000)
        """
        return await run("get-category-by-gender", _compact(
            startDate=startDate, endDate=endDate, timeUnit=timeUnit,
            category=category, device=device, gender=gender, ages=ages,
        ))

    @mcp.tool(name="get-category-by-age")
    async def get_category_by_age(
        startDate: DateArg,
        endDate: DateArg,
        timeUnit: TimeUnit,
        category: str,
        device: Optional[Device] = None,
        gender: Optional[Gender] = None,
        ages: Optional[List[AgeBand]] = None,
    ) -> str:
        """
        쇼핑인사이트 분야 내 연령별 트렌드 조회

        Args:
            category: 카테고리 ID (예: 50000000)
        """
        return await run("get-category-by-age", _compact(
            startDate=startDate, endDate=endDate, timeUnit=timeUnit,
            category=category, device=device, gender=gender, ages=ages,
        ))

    @mcp.tool(name="get-keyword-trends")
    async def get_keyword_trends(
        startDate: DateArg,
        endDate: DateArg,
        timeUnit: TimeUnit,
        category: str,
        keywords: KeywordGroups,
        device: Optional[Device] = None,
        gender: Optional[Gender] = None,
        ages: Optional[List[AgeBand]] = None,
    ) -> str:
        """
        쇼핑인사이트 키워드별 트렌드 조회

        Args:
            category: 카테고리 ID (예: 50000000)
            keywords: {name, param} 형태의 키워드 그룹 (최대 5개)
        """
        return await run("get-keyword-trends", _compact(
            startDate=startDate, endDate=endDate, timeUnit=timeUnit,
            category=category, keywords=_groups(keywords), device=device, gender=gender, ages=ages,
        ))

    @mcp.tool(name="get-keyword-by-device")
    async def get_keyword_by_device(
        startDate: DateArg,
        endDate: DateArg,
        timeUnit: TimeUnit,
        category: str,
        keyword: str,
        device: Optional[Device] = None,
        gender: Optional[Gender] = None,
        ages: Optional[List[AgeBand]] = None,
    ) -> str:
        """
        쇼핑인사이트 키워드 기기별 트렌드 조회

        Args:
            category: 카테고리 ID (예: 50000000)
            keyword: 검색 키워드 (예: 정장)
        """
        return await run("get-keyword-by-device", _compact(
            startDate=startDate, endDate=endDate, timeUnit=timeUnit,
            category=category, keyword=keyword, device=device, gender=gender, ages=ages,
        ))

    @mcp.tool(name="get-keyword-by-gender")
    async def get_keyword_by_gender(
        startDate: DateArg,
        endDate: DateArg,
        timeUnit: TimeUnit,
        category: str,
        keyword: str,
        device: Optional[Device] = None,
        gender: Optional[Gender] = None,
        ages: Optional[List[AgeBand]] = None,
    ) -> str:
        """
        쇼핑인사이트 키워드 성별 트렌드 조회

        Args:
            category: 카테고리 ID (예: 50000000)
            keyword: 검색 키워드 (예: 정장)
        """
        return await run("get-keyword-by-gender", _compact(
            startDate=startDate, endDate=endDate, timeUnit=timeUnit,
            category=category, keyword=keyword, device=device, gender=gender, ages=ages,
        ))

    @mcp.tool(name="get-keyword-by-age")
    async def get_keyword_by_age(
        startDate: DateArg,
        endDate: DateArg,
        timeUnit: TimeUnit,
        category: str,
        keyword: str,
        device: Optional[Device] = None,
        gender: Optional[Gender] = None,
        ages: Optional[List[AgeBand]] = None,
    ) -> str:
        """
        쇼핑인사이트 키워드 연령별 트렌드 조회

        Args:
            category: 카테고리 ID (예: 50000000)
            keyword: 검색 키워드 (예: 정장)
        """
        return await run("get-keyword-by-age", _compact(
            startDate=startDate, endDate=endDate, timeUnit=timeUnit,
            category=category, keyword=keyword, device=device, gender=gender, ages=ages,
        ))

    # ========== 검색 도구 ==========

    @mcp.tool(name="search-blog")
    async def search_blog(query: str, display: DisplayArg = 10, start: StartArg = 1, sort: BlogSort = "sim") -> str:
        """
        네이버 블로그 검색

        Args:
            query: 검색어
            display: 결과 개수 (1~100, 기본 10)
            start: 검색 시작 위치 (1~1000, 기본 1)
            sort: 정렬 방법 - sim(정확도순), date(날짜순)
        """
        return await run("search-blog", _compact(query=query, display=display, start=start, sort=sort))

    @mcp.tool(name="search-kin")
    async def search_kin(query: str, display: DisplayArg = 10, start: StartArg = 1, sort: KinSort = "sim") -> str:
        """
        네이버 지식iN 검색

        Args:
            sort: 정렬 방법 - sim(정확도순), date(날짜순), point(평점순)
        """
        return await run("search-kin", _compact(query=query, display=display, start=start, sort=sort))

    @mcp.tool(name="search-shopping")
    async def search_shopping(
        query: str,
        display: DisplayArg = 10,
        start: StartArg = 1,
        sort: ShoppingSort = "sim",
        filter: Optional[ShoppingFilter] = None,
        exclude: Optional[str] = None,
    ) -> str:
        """
        네이버 쇼핑 검색

        Args:
            sort: 정렬 방법 - sim(정확도순), date(날짜순), asc(가격 오름차순), dsc(가격 내림차순)
            filter: naverpay(네이버페이 연동 상품만)
            exclude: 제외할 상품 유형 - used(중고), rental(렌탈), cbshop(해외직구). 예: 'used:cbshop'
        """
        return await run("search-shopping", _compact(
            query=query, display=display, start=start, sort=sort, filter=filter, exclude=exclude,
        ))

    @mcp.tool(name="search-encyclopedia")
    async def search_encyclopedia(query: str, display: DisplayArg = 10, start: StartArg = 1) -> str:
        """
        네이버 백과사전 검색

        Args:
            query: 검색어
            display: 결과 개수 (1~100, 기본 10)
            start: 검색 시작 위치 (1~1000, 기본 1)
        """
        return await run("search-encyclopedia", _compact(query=query, display=display, start=start))

    @mcp.prompt(name="naver-api-guide")
    def naver_api_guide() -> str:
        """네이버 API MCP 서버 사용 안내"""
        return API_GUIDE

    return mcp


def main():
    config = load_config()
    configure_logging(config)
    if config["DEBUG_LOG"]:
        log_file = setup_debug_logging(config["DEBUG_LOG_DIR"])
        logger.info(f"디버그 로그 기록: {log_file}")

    try:
        client = NaverApiClient.from_config(config)
    except ConfigurationError as e:
        logger.error(f"서버 시작 실패: {str(e)}")
        sys.exit(1)

    server = create_server(client)
    logger.info("네이버 쇼핑인사이트 MCP 서버 시작 중...")
    server.run(transport="stdio")
