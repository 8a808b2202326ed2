from setuptools import setup, find_packages  # ignore: type

setup(
    name="index_migrator",
    version="1.0.0",
    description="Moves indices between OpenSearch/Elasticsearch clusters with reindex-from-remote and " +
                "doc count verification",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=["requests", "jsonpath-ng", "pyyaml", "requests-aws4auth", "botocore"],
    extras_require={
        "test": ["responses", "pytest"],
    },
    entry_points={
        "console_scripts": [
            "index-migrator = index_migrator.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: System Administrators",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: Apache Software License",
    ],
    python_requires=">=3.10",
)
