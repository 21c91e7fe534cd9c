#!/usr/bin/env python3
"""Setup script for samsung_cast_tv package."""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="samsung-cast-tv",
    version="1.0.0",
    author="",
    author_email="",
    description="Control a Samsung TV and its attached Chromecast, standalone or via MQTT",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=("tests", "tests.*")),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Home Automation",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    keywords="samsung chromecast tv mqtt smart-tv home-automation",
    install_requires=[
        "paho-mqtt>=2.0",
        "pyyaml>=6.0",
        "samsungtvws>=2.6",
        "PyChromecast>=14.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "samsung-cast-tv=samsung_cast_tv.cli:main",
            "samsungcast2mqtt=samsungcast2mqtt.__main__:main",
        ],
    },
    python_requires=">=3.10",
)
