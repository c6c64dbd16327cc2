# pylint: disable=redefined-outer-name
"""pytest 에서 사용될 전역 Fixture들을 정의합니다."""
from __future__ import annotations

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from repouow.config import set_config
from repouow.orm import SessionMaker, set_default_sessionmaker
from repouow.test import memory_sessionmaker

from bookstore.adapters.orm import init_mappers
from bookstore.config import Config
from tests.integration import insert_author, insert_book


@pytest.fixture(autouse=True)
def reset_globals() -> Generator[None, None, None]:
    """테스트마다 전역 Session 팩토리와 설정을 초기화 합니다."""
    yield
    set_default_sessionmaker(None)
    set_config(None)


@pytest.fixture
def get_session() -> SessionMaker:
    """매번 새로 만들어지는 인메모리 DB 의 :class:`.Session` 팩토리 픽스처.

    같은 팩토리에서 만든 세션들은 하나의 커넥션을 공유합니다.
    """
    return memory_sessionmaker([init_mappers])


@pytest.fixture
def session(get_session: SessionMaker) -> Generator[Session, None, None]:
    """테스트에 사용될 새로운 :class:`.Session` 픽스처를 리턴합니다."""
    session = get_session()
    yield session
    session.close()


@pytest.fixture
def seed(get_session: SessionMaker) -> dict[str, int]:
    """예제 저자 2명과 책 3권을 저장하고 이름/제목별 id 를 리턴합니다.

    - Mohamed(1): Clean Code(1)
    - Jane(2): Ninja(2), Ninga Warrior(3)
    """
    session = get_session()
    ids = {
        "Mohamed": insert_author(session, "Mohamed", id=1),
        "Jane": insert_author(session, "Jane", id=2),
    }
    ids["Clean Code"] = insert_book(session, "Clean Code", ids["Mohamed"], id=1)
    ids["Ninja"] = insert_book(session, "Ninja", ids["Jane"], id=2)
    ids["Ninga Warrior"] = insert_book(session, "Ninga Warrior", ids["Jane"], id=3)
    session.commit()
    session.close()
    return ids


@pytest.fixture
def config(get_session: SessionMaker) -> Config:
    """인메모리 DB 를 기본 Session 팩토리로 사용하는 앱 설정."""
    set_default_sessionmaker(get_session)
    config = Config()
    set_config(config)
    return config


@pytest.fixture
def client(config: Config) -> Generator[TestClient, None, None]:
    from repouow.api import init_app

    from bookstore.routes import fastapi  # noqa

    with TestClient(init_app(config)) as client:
        yield client
