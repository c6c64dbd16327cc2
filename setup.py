from os import path

from setuptools import setup

this_dir = path.abspath(path.dirname(__file__))
with open(path.join(this_dir, "README.md"), encoding="utf8") as f:
    long_description = f.read()

setup(
    name="RepoUoW",
    description="RepoUoW - Repository and Unit of Work patterns over SQLAlchemy and FastAPI",
    long_description=long_description,
    long_description_content_type="text/markdown",
    version="0.1",
    license="MIT",
    packages=[
        "repouow",
        "repouow.core",
        "repouow.test",
        "bookstore",
        "bookstore.adapters",
        "bookstore.domain",
        "bookstore.routes",
        "bookstore.schema",
    ],
    keywords=["repository", "unit-of-work", "sqlalchemy", "fastapi"],
    python_requires=">=3.9",
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy>=2.0",
        "pydantic>=2.0",
        "colorama",
        "tenacity",
        "httpx",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
    ],
    entry_points={
        "console_scripts": [
            "repouow = repouow.command:console_main",
        ]
    },
)
