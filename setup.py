from setuptools import setup, find_packages


setup(
    name="shorfactor",
    version="0.1.0",
    python_requires=">=3.8",
    packages=find_packages(include=["shorfactor*"]),
    install_requires=[
        "cirq>=1.0",
        "numpy",
    ],
    extras_require={
        "dev": ["pre-commit", "pytest"],
    },
    entry_points={
        "console_scripts": ["shorfactor=shorfactor.__main__:main"],
    },
)
