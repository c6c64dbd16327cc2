"""Command line script for RepoUoW."""
import os
import sys
from argparse import ArgumentParser, Namespace, RawTextHelpFormatter
from pathlib import Path
from textwrap import dedent
from typing import Optional, Sequence

import uvicorn

from repouow.config import RepoUoWConfig, set_config
from repouow.core import AbstractConfig, RepoUoWError, get_logger
from repouow.orm import init_db, set_default_sessionmaker, wait_for_db
from repouow.utils import Fore, bold, fg

YELLOW, CYAN, RED, GREEN, WHITE = (
    Fore.YELLOW,
    Fore.CYAN,
    Fore.RED,
    Fore.GREEN,
    Fore.WHITE,
)
WHITE_EX, CYAN_EX = Fore.LIGHTWHITE_EX, Fore.LIGHTCYAN_EX


logger = get_logger("repouow.command")


class RepoUoWCommand:
    def __init__(self, path: Optional[Path] = None):
        """Constructor.

        현재 경로(또는 `path`)의 `setup.cfg` 에서 `[repouow]` 섹션을 읽어 앱의
        `config.py` 를 로드합니다.
        """
        self.path = (path or Path(".")).absolute()
        self.config: AbstractConfig = RepoUoWConfig.load_from_config(self.path)
        set_config(self.config)

    def banner(self, msg, icon=""):
        """프로젝트 배너를 표시합니다."""
        if os.name == "nt":
            icon = ""
        try:
            term_width = os.get_terminal_size().columns
        except OSError:
            term_width = 75
        banner_width = min(75, term_width)
        print("─" * banner_width)
        print(f"{icon} {msg}")
        print("─" * banner_width)

    def info(self):
        """RepoUoW 앱 정보를 출력합니다."""
        dot = bold("-", YELLOW)
        self.banner(f"{bold('RepoUoW Information')}", icon="💡")
        print(dot, fg("Name", CYAN), "    :", fg(self.config.name, WHITE_EX))
        print(dot, fg("Title", CYAN), "   :", fg(self.config.title, WHITE_EX))
        print(dot, fg("Module", CYAN), "  :", fg(self.config.module_name, WHITE_EX))
        print(dot, fg("Path", CYAN), "    :", fg(self.path, WHITE_EX))
        print(dot, fg("Database", CYAN), ":", fg(self.config.get_db_url(), WHITE_EX))
        print(dot, fg("API", CYAN), "     :", fg(self.config.get_api_url(), WHITE_EX))

    def initdb(self, drop=False, wait=0, seed=False):
        """DB 테이블을 생성합니다.

        --wait N 옵션을 주면 DB가 접속 가능해질 때까지 최대 N번 재시도합니다.
        --seed 옵션을 주면 예제 데이터를 추가합니다.
        """
        bullet = bold("✓" if os.name != "nt" else "v", GREEN)
        db_url = self.config.get_db_url()

        if wait:
            wait_for_db(db_url, attempts=wait)

        set_default_sessionmaker(None)
        init_db(config=self.config, drop_all=drop)
        logger.info(f"{bullet} init {fg('database', CYAN)}... %s", bold(db_url, YELLOW))

        if seed:
            with self.config.uow as uow:
                self.config.seed(uow)
                count = uow.commit()
            logger.info(
                f"{bullet} seed {fg('examples', CYAN)}... %s rows added.",
                bold(f"{count}", YELLOW),
            )

    def run(self, app_name: Optional[str] = None, dry_run=False, reload=True):
        """RepoUoW 애플리케이션을 실행합니다."""
        msg = "".join(
            [
                bold("Launching RepoUoW: ", CYAN),
                bold(self.config.title, WHITE),
            ]
        )
        self.banner(msg, icon="🚀")

        if not app_name:
            app_name = f"{self.config.module_name}.__main__:app"

        if not dry_run:
            sys.path.insert(0, str(self.path))
            uvicorn.run(
                app_name,
                reload=reload,
                host=self.config.get_api_host(),
                port=self.config.get_api_port(),
            )

        return app_name


class RepoUoWCommandParser:
    """콘솔 커맨드 명령어 파서.

    실제 작업은 `RepoUoWCommand` 객체에 위임합니다.
    """

    def __init__(self, cmd: Optional[RepoUoWCommand] = None):
        """기본 생성자."""
        self.parser = ArgumentParser(
            "repouow",
            description=f"✨ {bold('RepoUoW')} : {fg('command line utility', CYAN_EX)}",
        )
        self._subparsers = self.parser.add_subparsers(dest="command")
        self._cmd = cmd or RepoUoWCommand()

        # init subparsers
        for handler in [
            self._cmd.info,
            self._cmd.initdb,
            self._cmd.run,
        ]:
            command = handler.__name__
            # 핸들러 함수의 주석을 커맨드라인 도움말로 변환하기 위한 작업입니다.
            doc = None
            if handler.__doc__:
                lines = handler.__doc__.splitlines()
                doc = lines[0] + "\n" + dedent("\n".join(lines[1:]))
            parser = self._subparsers.add_parser(
                command,
                description=doc,
                formatter_class=RawTextHelpFormatter,
            )
            if command == "initdb":
                parser.add_argument(
                    "--drop", action="store_true", help="기존 테이블을 지우고 다시 생성"
                )
                parser.add_argument(
                    "--wait", type=int, default=0, metavar="N", help="DB 접속 재시도 횟수"
                )
                parser.add_argument("--seed", action="store_true", help="예제 데이터 추가")
            if command == "run":
                parser.add_argument("app_name", metavar="app_name", nargs="?")
                parser.add_argument(
                    "--no-reload", action="store_true", help="코드 변경 시 자동 재시작 끄기"
                )

    def parse_args(self, args: Sequence[str]) -> int:
        """콘솔 명령어를 해석해서 적절한 작업을 수행합니다."""
        if not args:
            self.parser.print_help()
            return 0

        ns = self.parser.parse_args(args)
        try:
            if hasattr(self, ns.command):
                # 커맨드 명령어와 동일한 이름의 메소드가 파서 클래스에 있으면
                # 그 메소드를 호출해서 적당한 처리 후 실제 메소드를 호출합니다.
                getattr(self, ns.command)(ns)
            else:
                # 아닐 경우 RepoUoWCommand 클래스에서 핸들러를 호출합니다.
                getattr(self._cmd, ns.command)()
        except RepoUoWError as e:
            print(
                f"{bold('RepoUoW ERROR:', RED)} {fg(e.message, YELLOW)}",
                file=sys.stderr,
            )
            return 1

        return 0

    def initdb(self, ns: Namespace):
        """`initdb` 명령어 처리."""
        self._cmd.initdb(drop=ns.drop, wait=ns.wait, seed=ns.seed)

    def run(self, ns: Namespace):
        """`run` 명령어 처리."""
        self._cmd.run(app_name=ns.app_name, reload=not ns.no_reload)


def console_main():
    parser = RepoUoWCommandParser()
    sys.exit(parser.parse_args(sys.argv[1:]))


if __name__ == "__main__":
    console_main()
