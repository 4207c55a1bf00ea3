from setuptools import setup, find_packages

setup(
    name="mentormatch",
    version="0.1.0",
    packages=find_packages(include=["mentormatch", "mentormatch.*"]),
    python_requires=">=3.9",
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy>=2.0",
        "psycopg2-binary",
        "python-jose[cryptography]",
        "passlib[bcrypt]",
        # passlib's bcrypt backend self-test breaks on bcrypt 5
        "bcrypt<5",
        "pydantic[email]>=2",
        "pydantic-settings",
        "python-dotenv",
        "alembic",
    ],
    entry_points={
        "console_scripts": [
            "mentormatch=mentormatch.__main__:main",
        ],
    },
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
)
