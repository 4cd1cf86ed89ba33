from setuptools import setup, find_packages

setup(
    name="epidata-etl",
    version="1.0.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "pandas>=2.1.0",
        "numpy>=1.26.0",
        "requests>=2.31.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": ["pytest>=8.0.0"],
    },
    python_requires=">=3.10",
)
