import os
import pathlib

import setuptools


def local_file(name: str) -> str:
    """Interpret filename as relative to this file."""
    return os.path.relpath(os.path.join(os.path.dirname(__file__), name))


SOURCE = local_file("src")
README = local_file("README.md")

with open(local_file("src/sort_keys_fix/__init__.py")) as o:
    for line in o:
        if line.startswith("__version__"):
            _, __version__, _ = line.split('"')


setuptools.setup(
    name="sort-keys-fix",
    version=__version__,
    packages=setuptools.find_packages(SOURCE),
    package_dir={"": SOURCE},
    license="MIT",
    description="Require sorted dict keys in Python source, and sort them",
    zip_safe=False,
    install_requires=["jsonschema>=4.18.0", "typer>=0.9.0"],
    extras_require={"test": ["hypothesis>=6.84.3", "pytest"]},
    entry_points={"console_scripts": ["sort-keys-fix=sort_keys_fix._cli:app"]},
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Quality Assurance",
    ],
    long_description=pathlib.Path(README).read_text(),
    long_description_content_type="text/markdown",
    keywords="python lint sort dict keys autofix",
)
