#!/usr/bin/env python
from setuptools import setup, find_packages

setup(
    name="statdist",
    version="0.1.0",
    description="Expected values by fixed quadrature and closed-form distances between distributions",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",

    # statdist/ and its subpackages; tests and docs stay out of the wheel
    packages=find_packages(exclude=["tests*", "docs*", "examples*"]),

    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.22",
        "scipy>=1.9",
    ],
    extras_require={
        "dev": [
            "pytest",
        ],
    },

    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],

    include_package_data=False,
)
