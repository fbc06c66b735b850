import logging
from typing import Any, Dict, Optional

import httpx

from .config import DEFAULT_BASE_URL
from .debug_logger import log_api_request, log_api_response
from .errors import ConfigurationError, ResponseFormatError, TransportError, UpstreamApiError
from .request_builder import ApiRequest

logger = logging.getLogger(__name__)


class NaverApiClient:
    """
    네이버 Open API 클라이언트

    인증 정보는 생성 시 한 번만 읽고 이후에는 읽기 전용이다.
    호출마다 AsyncClient 를 새로 열어 호출 간에 공유되는 가변 상태가 없다.

    Args:
        client_id: 네이버 애플리케이션 Client ID
        client_secret: 네이버 애플리케이션 Client Secret
        base_url: API 호스트
        timeout: 요청 타임아웃 (초)
        transport: 테스트용 httpx 트랜스포트
    """

    def __init__(
        self,
        client_id: Optional[str],
        client_secret: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        user_agent: str = "naver-insight-mcp/2.0",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        missing = [
            name for name, value in (("client id", client_id), ("client secret", client_secret))
            if not value or not value.strip()
        ]
        if missing:
            raise ConfigurationError(
                f"네이버 API 인증 정보가 없습니다 ({', '.join(missing)}). 환경 변수를 확인해주세요."
            )

        self._headers = {
            "X-Naver-Client-Id": client_id,
            "X-Naver-Client-Secret": client_secret,
            "User-Agent": user_agent,
        }
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(cls, config: Dict[str, Any], **kwargs) -> "NaverApiClient":
        return cls(
            config.get("NAVER_CLIENT_ID"),
            config.get("NAVER_CLIENT_SECRET"),
            base_url=config.get("NAVER_API_BASE_URL", DEFAULT_BASE_URL),
            timeout=config.get("REQUEST_TIMEOUT", 30.0),
            user_agent=config.get("USER_AGENT", "naver-insight-mcp/2.0"),
            **kwargs,
        )

    async def get(self, request: ApiRequest, request_id: Optional[str] = None) -> Any:
        """
        GET 요청을 보내고 JSON 본문을 반환

        Raises:
            UpstreamApiError: 2xx 이외의 응답
            TransportError: DNS, 타임아웃, 연결 오류
            ResponseFormatError: 본문이 JSON 이 아님
        """
        url = f"{self.base_url}{request.path}"
        params = list(request.params)
        log_api_request(request_id, url, params, self._headers)

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                logger.info(f"네이버 API 호출: {request.method} {request.path}")
                response = await client.request(
                    request.method,
                    url,
                    params=params,
                    headers=self._headers,
                    follow_redirects=True,
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            payload = e.response.text
            logger.error(f"네이버 API HTTP 오류 {status_code}: {request.path}")
            log_api_response(request_id, status_code, len(payload), error=payload)
            raise UpstreamApiError(status_code, payload) from e
        except httpx.TimeoutException as e:
            logger.warning(f"네이버 API 요청 시간 초과: {request.path}")
            log_api_response(request_id, None, 0, error=e)
            raise TransportError(f"요청 시간 초과 ({e})", cause=e) from e
        except httpx.RequestError as e:
            logger.error(f"네이버 API 요청 실패 {request.path}: {str(e)}")
            log_api_response(request_id, None, 0, error=e)
            raise TransportError(str(e) or e.__class__.__name__, cause=e) from e

        log_api_response(request_id, response.status_code, len(response.content))
        try:
            return response.json()
        except ValueError as e:
            raise ResponseFormatError("JSON 본문이 아닙니다", payload=response.text) from e
