"""
검증된 요청 객체를 네이버 API 호출 정보(메서드, 경로, 쿼리 파라미터)로 변환
"""

import json
from dataclasses import dataclass
from typing import Any, List, Tuple

from pydantic import BaseModel

TREND_BASE_PATH = "/v1/datalab/shopping"
SEARCH_BASE_PATH = "/v1/search"

ENDPOINT_PATHS = {
    # 쇼핑인사이트
    "category_trends": f"{TREND_BASE_PATH}/categories",
    "category_device": f"{TREND_BASE_PATH}/category/device",
    "category_gender": f"{TREND_BASE_PATH}/category/gender",
    "category_age": f"{TREND_BASE_PATH}/category/age",
    "keyword_trends": f"{TREND_BASE_PATH}/category/keywords",
    "keyword_device": f"{TREND_BASE_PATH}/category/keyword/device",
    "keyword_gender": f"{TREND_BASE_PATH}/category/keyword/gender",
    "keyword_age": f"{TREND_BASE_PATH}/category/keyword/age",
    # 검색
    "blog": f"{SEARCH_BASE_PATH}/blog.json",
    "kin": f"{SEARCH_BASE_PATH}/kin.json",
    "shopping": f"{SEARCH_BASE_PATH}/shop.json",
    "encyclopedia": f"{SEARCH_BASE_PATH}/encyc.json",
}


@dataclass(frozen=True)
class ApiRequest:
    """네이버 API 호출 한 건"""

    method: str
    path: str
    params: Tuple[Tuple[str, str], ...]


def _encode_value(value: Any) -> str:
    # 그룹 목록, 연령대 등 구조화된 값은 JSON 배열 문자열 하나로 보낸다
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query_params(request: BaseModel) -> List[Tuple[str, str]]:
    """
    요청 객체의 값이 있는 필드를 선언 순서대로 (이름, 값) 목록으로 변환

    값이 없는 선택 필드는 빈 문자열로도 보내지 않고 아예 생략한다.
    """
    fields = request.model_dump(by_alias=True, exclude_none=True)
    return [(name, _encode_value(value)) for name, value in fields.items()]


def build_request(request: BaseModel, endpoint: str) -> ApiRequest:
    """
    Args:
        request: validate_arguments 로 얻은 요청 객체
        endpoint: ENDPOINT_PATHS 의 키

    Returns:
        ApiRequest: GET 메서드, API 경로, 순서가 고정된 쿼리 파라미터
    """
    try:
        path = ENDPOINT_PATHS[endpoint]
    except KeyError:
        raise ValueError(f"알 수 없는 엔드포인트: {endpoint}") from None

    return ApiRequest(method="GET", path=path, params=tuple(build_query_params(request)))
