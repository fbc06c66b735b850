"""
요청/응답 스키마 정의

도구 인자는 snake_case(start_date) 와 네이버 API 의 camelCase(startDate) 를
모두 받는다. 직렬화는 항상 camelCase 로, 필드 선언 순서를 유지한다.
"""

import re
from collections.abc import Mapping
from typing import Any, Callable, ClassVar, List, Literal, Optional, Tuple, Type, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from .errors import ResponseFormatError, ValidationError

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
_DATE_RE = re.compile(DATE_PATTERN)

MAX_CATEGORY_GROUPS = 3
MAX_KEYWORD_GROUPS = 5

TimeUnit = Literal["date", "week", "month"]
Device = Literal["pc", "mobile", "all"]
Gender = Literal["m", "f", "a"]
AgeBand = Literal["10", "20", "30", "40", "50", "60"]
BlogSort = Literal["sim", "date"]
KinSort = Literal["sim", "date", "point"]
ShoppingSort = Literal["sim", "date", "asc", "dsc"]
ShoppingFilter = Literal["naverpay"]

ModelT = TypeVar("ModelT", bound=BaseModel)


class NaverModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# 쇼핑인사이트 (트렌드) 요청
# ---------------------------------------------------------------------------


class NamedGroup(NaverModel):
    """표시용 이름 아래 묶인 카테고리/키워드 코드 그룹"""

    name: str
    param: List[str] = Field(min_length=1)


def _lookup(arguments: Any, *names: str) -> Any:
    if not isinstance(arguments, Mapping):
        return None
    for name in names:
        if name in arguments:
            return arguments[name]
    return None


def _check_period_order(arguments: Any) -> List[str]:
    start = _lookup(arguments, "start_date", "startDate")
    end = _lookup(arguments, "end_date", "endDate")
    if not (isinstance(start, str) and isinstance(end, str)):
        return []
    if not (_DATE_RE.match(start) and _DATE_RE.match(end)):
        return []
    if start > end:
        return [f"startDate: 시작일({start})이 종료일({end})보다 늦습니다"]
    return []


class TrendRequest(NaverModel):
    """트렌드 요청 공통 필드"""

    cross_field_rules: ClassVar[Tuple[Callable[[Any], List[str]], ...]] = (_check_period_order,)

    start_date: str = Field(pattern=DATE_PATTERN)
    end_date: str = Field(pattern=DATE_PATTERN)
    time_unit: TimeUnit


class CategoryTrendRequest(TrendRequest):
    """분야별 트렌드: 1~3 개의 카테고리 그룹"""

    category: List[NamedGroup] = Field(
        min_length=1,
        max_length=MAX_CATEGORY_GROUPS,
        validation_alias=AliasChoices("categories", "category"),
    )
    device: Optional[Device] = None
    gender: Optional[Gender] = None
    ages: Optional[List[AgeBand]] = None


class KeywordTrendRequest(TrendRequest):
    """분야 내 키워드별 트렌드: 카테고리 하나 + 1~5 개의 키워드 그룹"""

    category: str = Field(min_length=1)
    keyword: List[NamedGroup] = Field(
        min_length=1,
        max_length=MAX_KEYWORD_GROUPS,
        validation_alias=AliasChoices("keywords", "keyword"),
    )
    device: Optional[Device] = None
    gender: Optional[Gender] = None
    ages: Optional[List[AgeBand]] = None


class CategoryBreakdownRequest(TrendRequest):
    """단일 카테고리의 기기별/성별/연령별 트렌드"""

    category: str = Field(min_length=1)
    device: Optional[Device] = None
    gender: Optional[Gender] = None
    ages: Optional[List[AgeBand]] = None


class KeywordBreakdownRequest(TrendRequest):
    """단일 키워드의 기기별/성별/연령별 트렌드"""

    category: str = Field(min_length=1)
    keyword: str = Field(min_length=1)
    device: Optional[Device] = None
    gender: Optional[Gender] = None
    ages: Optional[List[AgeBand]] = None


# ---------------------------------------------------------------------------
# 검색 요청
# ---------------------------------------------------------------------------


class SearchRequest(NaverModel):
    cross_field_rules: ClassVar[Tuple[Callable[[Any], List[str]], ...]] = ()

    query: str = Field(min_length=1)
    display: int = Field(default=10, ge=1, le=100)
    start: int = Field(default=1, ge=1, le=1000)


class BlogSearchRequest(SearchRequest):
    sort: BlogSort = "sim"


class KinSearchRequest(SearchRequest):
    sort: KinSort = "sim"


class ShoppingSearchRequest(SearchRequest):
    sort: ShoppingSort = "sim"
    filter: Optional[ShoppingFilter] = None
    # used / rental / cbshop 을 ':' 로 연결한 값. 토큰은 검증하지 않고 그대로 전달
    exclude: Optional[str] = None

    @field_validator("filter", "exclude", mode="before")
    @classmethod
    def _blank_as_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class EncyclopediaSearchRequest(SearchRequest):
    """백과사전 검색 (정렬 옵션 없음)"""


# ---------------------------------------------------------------------------
# 응답
# ---------------------------------------------------------------------------


class TrendPoint(NaverModel):
    period: str
    ratio: float
    group: Optional[str] = None


class TrendSeries(NaverModel):
    title: str
    category: Optional[List[str]] = None
    keyword: Optional[List[str]] = None
    data: List[TrendPoint] = Field(default_factory=list)


class TrendResponse(NaverModel):
    start_date: str
    end_date: str
    time_unit: str
    results: List[TrendSeries] = Field(default_factory=list)


class SearchItem(NaverModel):
    title: str = ""
    link: str = ""
    description: str = ""


class ShoppingItem(SearchItem):
    image: Optional[str] = None
    lprice: Optional[int] = None
    hprice: Optional[int] = None
    mall_name: Optional[str] = None
    maker: Optional[str] = None
    brand: Optional[str] = None
    category1: Optional[str] = None
    category2: Optional[str] = None
    category3: Optional[str] = None
    category4: Optional[str] = None

    @field_validator("lprice", "hprice", mode="before")
    @classmethod
    def _parse_price(cls, value: Any) -> Any:
        # 쇼핑 API 는 가격을 문자열로 주며 최고가가 없으면 빈 문자열이다
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return value


class EncyclopediaItem(SearchItem):
    thumbnail: Optional[str] = None


class SearchResponse(NaverModel):
    last_build_date: str = ""
    total: int = 0
    start: int = 1
    display: int = 0
    items: List[SearchItem] = Field(default_factory=list)


class ShoppingSearchResponse(SearchResponse):
    items: List[ShoppingItem] = Field(default_factory=list)


class EncyclopediaSearchResponse(SearchResponse):
    items: List[EncyclopediaItem] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# 검증 진입점
# ---------------------------------------------------------------------------


def _describe_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ())) or "arguments"
    return f"{location}: {error.get('msg', 'invalid value')}"


def validate_arguments(schema: Type[ModelT], arguments: Any) -> ModelT:
    """
    도구 인자를 타입이 있는 요청 객체로 변환

    필드 제약과 필드 간 규칙을 모두 검사하고, 하나라도 위반하면
    위반 전체를 담은 ValidationError 를 발생시킨다.
    """
    if arguments is None:
        arguments = {}

    violations: List[str] = []
    request = None
    try:
        request = schema.model_validate(arguments)
    except PydanticValidationError as e:
        violations.extend(_describe_error(err) for err in e.errors())

    for rule in getattr(schema, "cross_field_rules", ()):
        violations.extend(rule(arguments))

    if violations:
        raise ValidationError(violations)
    return request


def parse_response(model: Type[ModelT], payload: Any) -> ModelT:
    """네이버 API 응답 JSON 을 응답 모델로 변환"""
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        details = "; ".join(_describe_error(err) for err in e.errors())
        raise ResponseFormatError(details, payload=str(payload)) from e
