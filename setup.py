#!/usr/bin/env python3
"""Setup script for Mufradat Arabic verb conjugation."""

from setuptools import setup, find_packages

setup(
    name="mufradat",
    version="0.1.0",
    description="Arabic triliteral verb conjugation engine (forms I-X)",
    author="Mufradat Team",
    python_requires=">=3.9",
    packages=find_packages(include=["mufradat_conjugator", "mufradat_conjugator.*"]),
    install_requires=[
        "pydantic>=2.0",
    ],
    extras_require={
        "dev": [
            "pytest",
            "black",
            "flake8",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Text Processing :: Linguistic",
    ],
)
