from repouow.api import init_app
from repouow.command import RepoUoWCommand

from bookstore.routes import fastapi  # noqa

cmd = RepoUoWCommand()
app = init_app(cmd.config)

if __name__ == "__main__":
    cmd.run(app_name="bookstore.__main__:app", reload=False)
