import os

from setuptools import find_packages, setup


def read(rel_path: str) -> str:
    here = os.path.abspath(os.path.dirname(__file__))
    with open(os.path.join(here, rel_path), encoding="utf-8") as fp:
        return fp.read()


def get_version(rel_path: str) -> str:
    for line in read(rel_path).splitlines():
        if line.startswith("__version__"):
            delim = '"' if '"' in line else "'"
            return line.split(delim)[1]
    raise RuntimeError("Unable to find version string.")


setup(
    name="cachemanager",
    version=get_version("cachemanager/__init__.py"),
    description="A shared fixed-capacity LRU cache with hit/miss statistics",
    license="MIT Licence",
    python_requires=">=3.8",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "pyyaml",
        "fire",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "cachemanager=cachemanager.cli:run",
        ],
    },
)
