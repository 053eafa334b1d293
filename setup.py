from setuptools import setup, find_packages

setup(
    name="streamtransform",
    version="0.1.0",
    packages=find_packages(include=["streamtransform", "streamtransform.*"]),
    install_requires=[
        "pydantic>=2.0",
        "PyYAML",
        "structlog",
        "typer",
        "prometheus-client",
        "simpleeval>=0.9.13",
        "jsonpath-ng",
        "defusedxml",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "streamtransform=streamtransform.cli:main",
        ],
    },
    author="Akshat Joshi",
    author_email="joshiakshat0511@gmail.com",
    description="Content-type aware expression transform stage for streaming pipelines",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
)
