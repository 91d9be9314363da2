"""Setup configuration for sut tool."""

from setuptools import setup, find_packages

setup(
    name="sut",
    version="0.1.0",
    description="Selective unit testing - run a chosen subset of unit test blocks",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "pyyaml>=6.0",
        "click>=8.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    entry_points={
        "console_scripts": [
            "sut=sut.cli:main",
        ],
    },
)
