from setuptools import find_packages, setup

setup(
    name="fspaths",
    version="0.1.0",
    description="Object-oriented filesystem paths with short-lived metadata caching",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[],
    entry_points={
        "console_scripts": [
            "fspaths=fspaths.__main__:main",
        ],
    },
    python_requires=">=3.10",
    extras_require={
        "dev": [
            "pytest",
            "build",
            "twine",
        ],
    },
)
