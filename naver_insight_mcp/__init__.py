"""네이버 쇼핑인사이트 / 검색 API MCP 서버"""

__version__ = "2.0.0"
