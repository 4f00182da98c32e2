# setup.py
from setuptools import setup, find_packages

setup(
    name="crawl_check",
    version="0.1.0",
    description="Смоук-проверка сайта в headless-браузере: обход, ошибки консоли и сети, серверные логи",
    packages=find_packages(include=["crawl_check", "crawl_check.*"]),
    package_data={"crawl_check": ["templates/*.j2"]},
    include_package_data=True,
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "jinja2>=3.1",
        "lxml>=5.0",
        "playwright>=1.40",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "crawl-check=crawl_check.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
