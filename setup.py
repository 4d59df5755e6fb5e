# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="htlgraph",
    version="0.1.0",
    description="Dependency-graph crawler for AEM components, for migration to React",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["htlgraph", "htlgraph.*"]),
    install_requires=[
        "requests>=2.28",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'htlgraph=htlgraph.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
