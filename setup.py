# setup.py
from setuptools import setup, find_packages

setup(
    name="dbal_adapter",
    version="0.1.0",
    description="Instrumented SQL adapter with query events, performance capture and logging",
    packages=find_packages(
        exclude=(
            "tests",
            "docs",
            "build",
            "dist",
        )
    ),
    python_requires=">=3.10",
    install_requires=[
        "psutil>=5.9",
    ],
    extras_require={
        "postgres": ["psycopg2-binary>=2.9"],
        "test": ["pytest>=7.0"],
    },
)
