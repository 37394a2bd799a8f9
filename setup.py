from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="transitgraph",
    version="0.3.0",
    author="Andrey Golovanov",
    description="A library for transit network modeling and stop centrality analysis.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires=">=3.9",
    install_requires=["deap", "networkx", "numpy", "pandas"],
    extras_require={"test": ["pytest"]},
)
