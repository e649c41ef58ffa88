#!/usr/bin/env python3
"""
Setup configuration for the dbt-core-interface client
"""

from setuptools import setup, find_packages
import os

# Read the contents of README file
this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

# Read requirements
with open(os.path.join(this_directory, 'requirements.txt')) as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith('#')]

setup(
    name="dbt-interface-client",
    version="1.0.0",
    author="dbt-interface-client Team",
    author_email="admin@example.com",
    description="Client for linting and formatting SQL through a dbt-core-interface server",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/example/dbt-interface-client",
    packages=find_packages(include=['src', 'src.*']),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Database",
        "Topic :: Software Development :: Quality Assurance",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    python_requires=">=3.11",
    install_requires=requirements,
    entry_points={
        'console_scripts': [
            'dbt-interface=src.main:cli',
        ],
    },
    extras_require={
        'dev': [
            'pytest>=7.4.0',
            'pytest-asyncio>=0.21.0',
            'black>=23.9.0',
            'isort>=5.12.0',
            'mypy>=1.6.0',
        ],
    },
    keywords="dbt sqlfluff sql lint format dbt-core-interface",
    project_urls={
        "Bug Reports": "https://github.com/example/dbt-interface-client/issues",
        "Source": "https://github.com/example/dbt-interface-client",
    },
)
