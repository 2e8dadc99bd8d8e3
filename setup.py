from __future__ import annotations

from setuptools import find_packages, setup

from config.version import PROJECT_VERSION, PYTHON_REQUIRES_SPECIFIER

INSTALL_REQUIRES = [
    "beautifulsoup4>=4.12",
    "feedparser>=6.0",
    "loguru>=0.7",
    "pydantic>=2.5",
    "python-dotenv>=1.0",
    "requests>=2.31",
    "tomli>=2.0; python_version < '3.11'",
    "tomli-w>=1.0",
]

TEST_REQUIRES = [
    "hypothesis>=6.90",
    "pytest>=7.4",
]

if __name__ == "__main__":
    setup(
        name="ethicalcrawler",
        version=PROJECT_VERSION,
        description="Colectores de noticias por API y RSS con estadísticas descriptivas",
        python_requires=PYTHON_REQUIRES_SPECIFIER,
        packages=find_packages(include=["config", "ethicalcrawler", "src", "src.*"]),
        py_modules=["run_collector"],
        install_requires=INSTALL_REQUIRES,
        extras_require={"test": TEST_REQUIRES},
        entry_points={
            "console_scripts": [
                "ethicalcrawler=run_collector:main",
                "ethicalcrawler-config=ethicalcrawler.config_manager:main",
            ]
        },
    )
