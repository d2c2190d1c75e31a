#!/usr/bin/env python3
"""Setup script for Strapi Type Generator"""

from setuptools import setup

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="strapi-typegen",
    version="1.0.0",
    author="Strapi Type Generator Contributors",
    description="Generate plain TypeScript interfaces for a frontend from Strapi content types",
    long_description=long_description,
    long_description_content_type="text/markdown",
    py_modules=["strapi_typegen"],
    package_dir={"": "src"},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Code Generators",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=[
        "typer>=0.9.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "strapi-typegen=strapi_typegen:main",
        ],
    },
)
