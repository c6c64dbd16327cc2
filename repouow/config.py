"""기본 환경 설정."""

from __future__ import annotations

import importlib
import os
import sys
from configparser import ConfigParser
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Type, cast

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.pool import Pool, StaticPool

from repouow.core import AbstractConfig, ConfigError

SETUP_CFG_SECTION = "repouow"


@dataclass
class RepoUoWSetupConfig:
    name: str
    title: Optional[str] = None
    module_name: Optional[str] = None


def load_setupcfg(path: Path) -> Optional[RepoUoWSetupConfig]:
    if (path / "setup.cfg").exists():
        # 경로에 "setup.cfg" 파일이 있다면 [repouow] 섹션에서
        # name, module 등의 정보를 읽습니다.
        config = ConfigParser()
        config.read(path / "setup.cfg", encoding="utf8")
        if SETUP_CFG_SECTION in config:
            try:
                return RepoUoWSetupConfig(**config[SETUP_CFG_SECTION])
            except TypeError as e:
                raise ConfigError(f"invalid [{SETUP_CFG_SECTION}] section: {e}") from e
    return None


@dataclass
class RepoUoWConfig(AbstractConfig):
    """RepoUoW App 설정.

    ``DB_URL`` 환경변수가 없으면 인메모리 SQLite 를 사용합니다.
    """

    name: str = "repouow"
    title: str = "RepoUoW"
    module_name: str = "repouow"

    def get_db_url(self) -> str:
        """SqlAlchemy 에서 사용 가능한 형식의 DB URL을 리턴합니다."""
        return os.environ.get("DB_URL", "sqlite://")

    def is_sqlite(self) -> bool:
        try:
            return make_url(self.get_db_url()).get_backend_name() == "sqlite"
        except ArgumentError as e:
            raise ConfigError(f"invalid database url: {self.get_db_url()}") from e

    def is_memory_db(self) -> bool:
        return self.is_sqlite() and make_url(self.get_db_url()).database in (
            None,
            "",
            ":memory:",
        )

    def get_db_connect_args(self) -> dict[str, Any]:
        """SQLite 커넥션은 스레드풀에서도 쓸 수 있어야 합니다."""
        if self.is_sqlite():
            return {"check_same_thread": False}
        return {}

    def get_db_poolclass(self) -> Optional[Type[Pool]]:
        """인메모리 SQLite 는 모든 세션이 하나의 커넥션을 공유해야 합니다."""
        if self.is_memory_db():
            return StaticPool
        return None

    @staticmethod
    def load_from_config(path: Path = Path(".")) -> RepoUoWConfig:
        """`setup.cfg` 의 정보를 이용해 앱의 `config.py` 를 로드한다."""
        cfg = load_setupcfg(path)
        name = path.absolute().name
        title = name
        module_name = name

        if cfg:
            name = cfg.name
            module_name = cfg.module_name or name
            title = cfg.title or name

        kwargs = dict(name=name, title=title, module_name=module_name)
        module_path = path / module_name.replace(".", "/")

        if (module_path / "config.py").exists():
            abs_path = str(path.absolute())
            if abs_path not in sys.path:
                sys.path.insert(0, abs_path)

            conf_module = importlib.import_module(f"{module_name}.config")
            config = getattr(conf_module, "Config", None)
            if not config:
                raise ConfigError(f"{module_name}.config has no `Config` class")
            # config.py 파일이 발견되면 이 설정을 로드합니다.
            return cast(RepoUoWConfig, config(**kwargs))

        return RepoUoWConfig(**kwargs)


_config: Optional[AbstractConfig] = None


def get_config() -> AbstractConfig:
    """현재 프로세스의 앱 설정을 리턴합니다. 처음 호출될 때 현재 경로에서 로드합니다."""
    global _config  # pylint: disable=global-statement,invalid-name
    if not _config:
        _config = RepoUoWConfig.load_from_config()
    return _config


def set_config(config: Optional[AbstractConfig]) -> None:
    global _config  # pylint: disable=global-statement,invalid-name
    _config = config
