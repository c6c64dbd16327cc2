"""ORM 어댑터 모듈"""
from __future__ import annotations

from typing import Any, Callable, Optional, Type, cast

from sqlalchemy import MetaData, create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import clear_mappers as _clear_mappers
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm.session import Session
from sqlalchemy.pool import Pool
from tenacity import RetryError, Retrying, retry_if_exception_type, stop_after_attempt
from tenacity import wait_exponential

from repouow.core import AbstractConfig, InfrastructureError, get_logger

SessionMaker = Callable[[], Session]
"""Session 팩토리 타입."""
InitHook = Callable[[MetaData], Any]
"""``MetaData`` 에 테이블과 매핑을 등록하는 함수 타입."""

metadata: Optional[MetaData] = None

_get_session: Optional[SessionMaker] = None  # pylint: disable=invalid-name

logger = get_logger("repouow.orm")


def get_sessionmaker() -> SessionMaker:
    """기본설정으로 SqlAlchemy Session 팩토리를 만듭니다."""
    from repouow.config import get_config

    if not _get_session:
        return init_db(config=get_config())

    return _get_session


def set_default_sessionmaker(get_session: Optional[SessionMaker]) -> None:
    """기본 Session 팩토리를 교체합니다. 테스트에서 인메모리 DB를 주입할 때 사용합니다."""
    global _get_session  # pylint: disable=global-statement,invalid-name
    _get_session = get_session


def init_db(
    db_url: Optional[str] = None,
    drop_all: bool = False,
    init_hooks: Optional[list[InitHook]] = None,
    config: Optional[AbstractConfig] = None,
) -> SessionMaker:
    """DB 엔진을 초기화 합니다.

    이미 기본 Session 팩토리가 있으면 그대로 리턴합니다.
    """
    global _get_session  # pylint: disable=global-statement,invalid-name

    if _get_session:
        return _get_session

    if config and init_hooks is None:
        init_hooks = config.get_init_hooks()

    meta = start_mappers(init_hooks=init_hooks)

    engine = init_engine(
        meta,
        db_url if db_url else (config.get_db_url() if config else "sqlite://"),
        connect_args=config.get_db_connect_args() if config else None,
        poolclass=config.get_db_poolclass() if config else None,
        drop_all=drop_all,
    )
    _get_session = cast(SessionMaker, sessionmaker(engine))
    return _get_session


def start_mappers(
    use_exist: bool = True, init_hooks: Optional[list[InitHook]] = None
) -> MetaData:
    """도메인 객체들을 SqlAlchemy ORM 매퍼에 등록합니다."""
    global metadata  # pylint: disable=global-statement,invalid-name
    if use_exist and metadata:
        return metadata

    metadata = MetaData()

    # 사용자 매핑 함수 추가.
    if init_hooks:
        for hook in init_hooks:
            hook(metadata)

    return metadata


def clear_mappers() -> None:
    """ORM 매핑을 초기화 합니다."""
    global metadata  # pylint: disable=global-statement,invalid-name
    _clear_mappers()
    metadata = None


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def init_engine(
    meta: MetaData,
    url: str,
    connect_args: Optional[dict[str, Any]] = None,
    poolclass: Optional[Type[Pool]] = None,
    drop_all: bool = False,
) -> Engine:
    """ORM Engine을 초기화 합니다.

    SQLite 의 경우 참조 무결성 검사를 위해 외래키 제약을 켭니다.
    ``meta`` 에 등록된 테이블은 모두 생성되며, ``drop_all=True`` 이면 먼저 삭제합니다.
    """
    kwargs: dict[str, Any] = dict(connect_args=connect_args or {})
    if poolclass:
        kwargs["poolclass"] = poolclass

    engine = create_engine(url, **kwargs)

    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    if drop_all:
        meta.drop_all(engine)

    meta.create_all(engine)

    return engine


def wait_for_db(url: str, attempts: int = 5, max_wait: float = 8.0) -> None:
    """DB 가 접속을 받을 때까지 지수적으로 대기 시간을 늘려가며 재시도합니다.

    Raises:
        :class:`InfrastructureError`: ``attempts`` 번 시도한 후에도 접속할 수 없을 때.
    """
    engine = create_engine(url)
    try:
        for attempt in Retrying(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(min=0.5, max=max_wait),
            retry=retry_if_exception_type(OperationalError),
        ):
            with attempt:
                num = attempt.retry_state.attempt_number
                logger.info("waiting for database (attempt %d/%d)", num, attempts)
                with engine.connect() as conn:
                    conn.execute(text("SELECT 1"))
    except RetryError as e:
        raise InfrastructureError(
            f"database is not ready after {attempts} attempts: {engine.url!r}"
        ) from e
    finally:
        engine.dispose()
