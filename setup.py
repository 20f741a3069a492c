#!/usr/bin/env python3
"""
fqcellpy - embed cell barcodes into FASTQ read names
"""

from setuptools import setup, find_packages

# 读取版本号
def get_version():
    with open("fqcell/__init__.py", "r") as f:
        for line in f:
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"').strip("'")
    return "0.1.0"

# 读取长描述
def get_long_description():
    try:
        with open("README.md", "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        return "fqcellpy - embed cell barcodes from a cell FASTQ into R1/R2 read names"

setup(
    name="fqcellpy",
    version=get_version(),
    author="fqcell developers",
    author_email="",
    description="Embed cell barcodes from a cell FASTQ into paired-end read names",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
    ],
    python_requires=">=3.8",
    install_requires=[
        "pandas>=1.3.0",
        "tqdm>=4.0",
    ],
    extras_require={
        "test": [
            "pytest>=6.0",
            "biopython>=1.79",
        ],
        "dev": [
            "pytest>=6.0",
            "pytest-cov>=2.0",
            "biopython>=1.79",
            "black>=21.0",
            "isort>=5.0",
            "mypy>=0.900",
        ],
    },
    entry_points={
        "console_scripts": [
            "fqcell=fqcell.cli:main",
        ],
    },
    zip_safe=False,
)
