"""Packaging for the Solana Token Launcher."""

from pathlib import Path

from setuptools import find_packages, setup

HERE = Path(__file__).parent


def read(name):
    return (HERE / name).read_text(encoding="utf-8")


def read_requirements(name="requirements.txt"):
    lines = (line.strip() for line in read(name).splitlines())
    return [line for line in lines if line and not line.startswith("#")]


# __version__, __author__ and __email__ without importing the package
about = {}
exec(read("token_launcher/__init__.py"), about)

setup(
    name="solana-token-launcher",
    version=about["__version__"],
    description="Interactive SPL token creation, minting and metadata tool for Solana",
    long_description=read("README.md"),
    long_description_content_type="text/markdown",
    author=about["__author__"],
    author_email=about["__email__"],
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=read_requirements(),
    extras_require={
        "test": ["pytest>=7.0.0", "pytest-asyncio>=0.21.0"],
    },
    python_requires=">=3.10",
    entry_points={
        "console_scripts": ["token-launcher=token_launcher.__main__:main"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Operating System :: POSIX",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Utilities",
    ],
)
