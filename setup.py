import setuptools
from pathlib import Path

with Path("README.md").open(encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="graphlayout",
    version="0.1.0",
    author="graphlayout developers",
    description="Layout algorithms for network and hierarchy visualization",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    install_requires=[
        "pandas>=1.3.0",
        "numpy>=1.20.0",
        "networkx>=3.3",
        "scipy>=1.8.0"
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    packages=setuptools.find_packages(),
    entry_points={
        "console_scripts": [
            "graphlayout=graphlayout.__main__:main",
        ],
    },
    python_requires=">=3.10",
)
