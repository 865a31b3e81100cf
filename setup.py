#!/usr/bin/env python3
"""paasctl CLI - Setup"""

from setuptools import setup, find_packages

with open("requirements.txt") as f:
    requirements = f.read().splitlines()

setup(
    name="paasctl",
    version="1.0.0",
    description="Command-line client for the platform-as-a-service API",
    author="paasctl Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"paasctl": ["config.yaml"]},
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "paasctl=paasctl.main:main",
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
