"""Setup script for quant-env."""

from setuptools import find_packages, setup

setup(
    name="quant-env",
    version="1.0.0",
    description="Reconcile CI environment variables with Quant Cloud",
    author="QuantCDN",
    packages=find_packages(include=["quant_env", "quant_env.*"]),
    install_requires=[
        "click>=8.0.0",  # CLI framework (typer runtime)
        "typer>=0.12.0",  # Modern CLI framework
        "rich>=13.0.0",  # Terminal display
        "requests>=2.28.0",  # HTTP client for the variables API
        "python-dotenv>=1.0.0",  # Local settings files
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.1.0",
            "black>=22.1.0",
            "isort>=5.10.1",
            "flake8>=4.0.1",
            "mypy>=1.0.0",  # Type checking
        ],
        "test": [
            "pytest>=7.0.0",
            "pytest-cov>=4.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "quant-env=quant_env.cli.main:cli",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Software Development :: Build Tools",
    ],
)
