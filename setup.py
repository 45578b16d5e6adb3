# setup.py
from setuptools import setup, find_packages

setup(
    name="page_harvest",
    version="0.1.0",
    description="Вежливый BFS-краулер PageHarvest с пакетной отправкой страниц",
    packages=find_packages(include=["page_harvest", "page_harvest.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "soupsieve>=2.5",
        "click>=8.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["page-harvest=page_harvest.cli:cli"],
    },
    python_requires=">=3.11",
)
