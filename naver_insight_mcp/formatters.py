"""
네이버 API 응답을 사람이 읽을 수 있는 텍스트로 변환

모든 함수는 순수 함수이며 같은 입력에 대해 항상 같은 텍스트를 만든다.
"""

import re

from bs4 import BeautifulSoup

from .schemas import (
    EncyclopediaSearchResponse,
    SearchResponse,
    ShoppingSearchResponse,
    TrendResponse,
)


def clean_markup(text: str) -> str:
    """검색 결과의 <b> 강조 태그와 HTML 엔티티를 제거"""
    if not text:
        return ""
    if "<" not in text and "&" not in text:
        return text
    plain = BeautifulSoup(text, "html.parser").get_text()
    return re.sub(r'\s+', ' ', plain).strip()


def format_count(value: int) -> str:
    return f"{value:,}"


def format_ratio(value: float) -> str:
    return f"{value:.2f}"


def format_trend_response(response: TrendResponse) -> str:
    """쇼핑인사이트 트렌드 응답 포맷팅"""
    lines = [
        "[네이버 쇼핑인사이트 분석 결과]",
        f"조회 기간: {response.start_date} ~ {response.end_date}",
        f"시간 단위: {response.time_unit}",
        "",
    ]

    for series in response.results:
        lines.append(f"항목: {series.title}")
        if series.category:
            lines.append(f"카테고리: {', '.join(series.category)}")
        if series.keyword:
            lines.append(f"키워드: {', '.join(series.keyword)}")

        lines.append("데이터:")
        for point in series.data:
            line = f"  - {point.period}: {format_ratio(point.ratio)}"
            # 기기별/성별/연령별 조회는 구간마다 그룹 값이 붙는다
            if point.group:
                line += f" ({point.group})"
            lines.append(line)
        lines.append("")

    return "\n".join(lines) + "\n"


def _search_header(label: str, response: SearchResponse) -> list:
    last = response.start + response.display - 1
    return [
        f"[네이버 {label} 검색 결과]",
        f"총 검색 결과: {format_count(response.total)}개",
        f"조회 범위: {response.start} ~ {last}",
        f"검색 시간: {response.last_build_date}",
        "",
    ]


def format_search_response(label: str, response: SearchResponse) -> str:
    """
    블로그/지식iN 공통 검색 결과 포맷팅

    Args:
        label: 헤더에 표시할 검색 종류 (예: 블로그, 지식iN)
        response: 검색 응답
    """
    lines = _search_header(label, response)
    for index, item in enumerate(response.items, start=1):
        lines.append(f"[{index}] {clean_markup(item.title)}")
        lines.append(f"링크: {item.link}")
        lines.append(f"설명: {clean_markup(item.description)}")
        lines.append("")
    return "\n".join(lines) + "\n"


def format_shopping_response(response: ShoppingSearchResponse) -> str:
    lines = _search_header("쇼핑", response)
    for index, item in enumerate(response.items, start=1):
        lines.append(f"[{index}] {clean_markup(item.title)}")
        if item.lprice:
            price = f"가격: {format_count(item.lprice)}원"
            if item.hprice and item.hprice > 0:
                price += f" ~ {format_count(item.hprice)}원"
            lines.append(price)
        if item.mall_name:
            lines.append(f"쇼핑몰: {item.mall_name}")
        if item.brand:
            lines.append(f"브랜드: {item.brand}")

        # 대분류가 있을 때만 표시하고, 비어 있는 하위 단계는 건너뛴다
        if item.category1:
            path = [c for c in (item.category1, item.category2, item.category3) if c]
            lines.append(f"카테고리: {' > '.join(path)}")

        lines.append(f"링크: {item.link}")
        lines.append("")
    return "\n".join(lines) + "\n"


def format_encyclopedia_response(response: EncyclopediaSearchResponse) -> str:
    lines = _search_header("백과사전", response)
    for index, item in enumerate(response.items, start=1):
        lines.append(f"[{index}] {clean_markup(item.title)}")
        if item.thumbnail:
            lines.append(f"이미지: {item.thumbnail}")
        lines.append(f"설명: {clean_markup(item.description)}")
        lines.append(f"링크: {item.link}")
        lines.append("")
    return "\n".join(lines) + "\n"
