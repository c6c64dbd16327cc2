"""FastAPI 로 구현한 RESTful 서비스 앱."""
from typing import Any

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from repouow.core import (
    AbstractConfig,
    InfrastructureError,
    PersistenceError,
    RepoUoWError,
    get_logger,
)

# globals
app: FastAPI = FastAPI(title=__name__)  # pylint:

logger = get_logger("repouow.api")


def error_response(status_code: int, e: RepoUoWError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": e.__class__.__name__, "message": e.message},
    )


@app.exception_handler(InfrastructureError)
async def handle_infrastructure_error(request: Request, e: InfrastructureError):
    """저장소를 사용할 수 없거나 쿼리가 잘못된 경우 ``503`` 으로 응답합니다."""
    logger.error("%s %s: %s", request.method, request.url.path, e.message)
    return error_response(503, e)


@app.exception_handler(PersistenceError)
async def handle_persistence_error(request: Request, e: PersistenceError):
    """커밋이 제약조건 위반 등으로 실패한 경우 ``409`` 로 응답합니다."""
    logger.warning("%s %s: %s", request.method, request.url.path, e.message)
    return error_response(409, e)


def init_app(config: AbstractConfig) -> FastAPI:
    """FastAPI 앱을 초기화 합니다.

    설정의 앱 제목을 적용하고 :meth:`repouow.orm.init_db` 를 호출하여 DB를
    초기화 합니다. 엔드포인트는 앱 모듈이 ``app`` 에 직접 등록합니다.
    """
    from repouow.orm import init_db  # noqa

    app.title = config.title

    init_db(config=config)

    return app


class AsyncAPIClient:
    """엔드포인트를 비동기로 호출하는 테스트용 API 클라이언트."""

    def __init__(self, session: httpx.AsyncClient):
        self.session = session

    async def get(self, path: str, expect_status: int = 200) -> Any:
        r = await self.session.get(path)
        assert r.status_code == expect_status, r.text
        return r.json()

    async def post(self, path: str, data: dict[str, Any], expect_status: int = 201):
        r = await self.session.post(path, json=data)
        assert r.status_code == expect_status, r.text
        return r.json()
