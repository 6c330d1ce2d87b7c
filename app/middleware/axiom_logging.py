"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Sends one structured event per API request to Axiom: method, path,
search/paging query parameters, status code, duration and, for error
responses, the error detail. Pass-through when Axiom is not configured.
"""

import json
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

# 에러 사유 최대 길이 — Max length of the logged error detail
_MAX_ERROR_LEN = 500


def _error_detail(body: bytes) -> str:
    """에러 응답 본문에서 사유를 추출합니다 (Extract the detail of an error body)."""
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return body.decode("utf-8", errors="replace")[:_MAX_ERROR_LEN]

    detail = data.get("detail", data) if isinstance(data, dict) else data
    text = detail if isinstance(detail, str) else json.dumps(detail, default=str)
    return text[:_MAX_ERROR_LEN]


async def _read_body(response: Response) -> bytes:
    body = b""
    async for chunk in response.body_iterator:
        body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
    return body


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs API requests and responses to Axiom.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if self._client is None or request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        event: dict[str, Any] = {
            "method": request.method,
            "path": request.url.path,
            "status_code": 500,
        }
        if request.query_params:
            # 검색 조건/페이지 파라미터 — Search condition and paging parameters
            event["query_params"] = dict(request.query_params)

        try:
            response = await call_next(request)
            event["status_code"] = response.status_code

            if response.status_code >= 400:
                body = await _read_body(response)
                event["error"] = _error_detail(body)
                # 소비한 body를 다시 응답으로 반환 — Re-wrap consumed body
                response = Response(
                    content=body,
                    status_code=response.status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event["duration_ms"] = round((time.perf_counter() - start_time) * 1000, 2)
            try:
                # 동기 HTTP 호출은 스레드풀에서 — Sync ingest runs off the event loop
                await run_in_threadpool(self._client.ingest_events, self._dataset, [event])
            except Exception:
                pass  # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break request on log failure

        return response
