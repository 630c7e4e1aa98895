"""
NexaFlow TypeGen - TypeScript type and Zod schema generator
Install: pip install -e .
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="typegen",
    version="1.0.0",
    author="NexaFlow",
    author_email="",
    description="Generate TypeScript interfaces, enums and Zod schemas from YAML/JSON schemas",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["typegen", "typegen.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Code Generators",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.0.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "typegen=typegen.cli:main",
        ],
    },
    keywords="typescript, zod, generator, schema, code-generator, i18n, python",
)
