# setup.py
from setuptools import find_namespace_packages, setup

setup(
    name="auckland-school-finder",
    version="0.1.0",
    # app.api, app.services etc. have no __init__.py
    packages=find_namespace_packages(include=["app", "app.*"]),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn[standard]>=0.27",
        "sqlalchemy[asyncio]>=2.0",
        "asyncpg>=0.29",
        "alembic>=1.13",
        "psycopg[binary]>=3.1",
        "geoalchemy2>=0.14",
        "shapely>=2.0",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "structlog>=24.1",
        "sentry-sdk>=1.40",
        "httpx>=0.26",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "httpx>=0.26",
        ],
    },
)
