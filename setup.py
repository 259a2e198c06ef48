from pathlib import Path

from setuptools import find_packages, setup

_here = Path(__file__).parent.resolve()
_readme = _here / "README.md"


setup(
    name="lsedit-core",
    version="0.1.0",
    description="Text edits for language servers: validate and apply byte-range edits, convert them from/to LSP positions and relay request cancellation.",
    long_description=_readme.read_text(encoding="utf-8"),
    license="Apache-2.0",
    package_dir={"": "src"},
    packages=find_packages("src"),
    zip_safe=False,
    long_description_content_type="text/markdown",
    python_requires=">=3.8",
    # No run-time dependencies (only the standard library is used).
    install_requires=[],
    # List additional groups of dependencies here (e.g. development
    # dependencies). You can install these using the following syntax,
    # for example:
    # $ pip install -e .[test]
    extras_require={
        "test": [
            "mock",
            "pytest",
            "pytest-xdist",
            "pytest-timeout",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: MacOS :: MacOS X",
        "Operating System :: Microsoft :: Windows",
        "Operating System :: POSIX",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Text Editors",
        "Topic :: Text Editors :: Integrated Development Environments (IDE)",
    ],
)
