from setuptools import find_packages, setup


setup(
    name="ServerSettings",
    version="0.1.0",
    description="TOML settings loader with environment overrides for uvicorn and FastAPI servers",
    long_description=open("README.md", encoding="UTF8").read(),
    long_description_content_type="text/markdown",
    author="Rud356",
    author_email="rud356github@gmail.com",
    python_requires=">=3.11.0",
    license="MIT License",
    classifiers=[
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Programming Language :: Python :: Implementation :: CPython",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Operating System :: Microsoft :: Windows :: Windows 10",
        "Operating System :: Microsoft :: Windows :: Windows 11",
        "Intended Audience :: Developers",
        "Natural Language :: Russian",
    ],
    install_requires=[
        "pydantic~=2.11",
        "pydantic-settings~=2.9",
        "tomli-w~=1.2",
        "fastapi[standard]~=0.115.12",
        "starlette>=0.46.2",
        "uvicorn~=0.34.0",
        "dishka~=1.6.0",
        "loguru~=0.7.3",
    ],
    extras_require={
        "linters": ["ruff~=0.11.2", "mypy~=1.15.0"],
        "dev": [
            "ruff>=0.11.2",
            "sphinx>=5.0.2",
            "docxbuilder",
            "pytest-xdist[psutil]",
            "sphinx-rtd-theme>=3.0.2",
            "Pygments>=2.12.0,<3.0.0",
            "pytest>=8.3.5,<9.0.0",
            "httpx>=0.28.0",
        ],
    },
    packages=find_packages(include=["server_settings", "server_settings.*"])
)
