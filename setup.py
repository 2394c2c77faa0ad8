from pathlib import Path
from setuptools import find_packages, setup

HERE = Path(__file__).parent


def _read_version() -> str:
    init = HERE / "src" / "path2md" / "__init__.py"
    for line in init.read_text(encoding="utf-8").splitlines():
        if line.startswith("__version__"):
            return line.split("=", 1)[1].strip().strip("'\"")
    raise RuntimeError("__version__ not found in src/path2md/__init__.py")


setup(
    name="path2md",
    version=_read_version(),
    description="Dump a file or directory tree as a structured text report",
    author="GAHEOS",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "path2md=path2md.cli:main",
        ],
    },
)
