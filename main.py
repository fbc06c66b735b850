from naver_insight_mcp.server import main

# MCP 서버 시작 (stdio)
if __name__ == "__main__":
    # 필요 패키지: pip install -e .
    main()
