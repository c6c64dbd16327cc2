"""Test 헬퍼를 제공하는 모듈.

- 인메모리 SQLite 세션 팩토리와 SQL 실행 횟수를 세는 :class:`QueryCounter` 를
  제공합니다.
"""
from .unit import QueryCounter, memory_sessionmaker  # noqa
