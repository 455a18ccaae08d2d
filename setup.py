from setuptools import setup, find_packages

setup(
    name="tradejournal-import-backend",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0.0",
        "python-dateutil>=2.8.2",
    ],  # boto3 is provided by Lambda
    extras_require={
        "local": [
            "boto3>=1.26.0",
            "botocore>=1.29.0",
        ],
        "dev": [
            "mypy>=1.0.0",
            "types-boto3>=1.0.0",
            "types-python-dateutil>=2.8.0",
            "boto3>=1.26.0",
            "botocore>=1.29.0",
            "moto[s3]>=5.0.0",
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "isort>=5.0.0",
            "flake8>=6.0.0"
        ],
        "test": [
            "boto3>=1.26.0",
            "botocore>=1.29.0",
            "moto[s3]>=5.0.0",
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ]
    }
)
