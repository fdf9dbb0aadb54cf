"""
Setup script for backbench.

Backbench is a terminal learning engine. It takes any topic through a
five-stage cycle:

1. Diagnostic - Assess prior knowledge
2. Explanation - Build mental models
3. Practice - Adaptive exercises gated into verification
4. Verification - Prove application on a case study
5. Reflection - Lock the cycle in

The 'backbench' command is the entry point.
"""

from setuptools import find_packages, setup

setup(
    name="backbench",
    version="2.1.0",
    description="Terminal learning engine with Gemini-generated content",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["backbench", "backbench.*"]),
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.7.0",
        # Config & Validation
        "pydantic>=2.6.0",
        "pydantic-settings>=2.0.0",
        # Content generation
        "google-generativeai>=0.8.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "backbench=backbench.cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Education",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="learning cli education gemini mastery",
)
