from setuptools import setup, find_namespace_packages

setup(
    name="sealion-mcp",
    version="1.0.0",
    packages=find_namespace_packages(include=["sealion_mcp", "sealion_mcp.*"]),
    python_requires=">=3.11",
    install_requires=[
        "mcp>=1.9,<2",
        "openai>=1.40,<2",
        "httpx>=0.27",
        "pydantic>=2.7",
        "pydantic-settings>=2.3",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "respx>=0.21",
        ],
    },
    entry_points={
        "console_scripts": [
            "sealion-mcp=sealion_mcp.app.main:run",
        ],
    },
)
