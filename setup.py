#!/usr/bin/env python

from setuptools import setup

console_scripts = []
console_scripts.append("guidetree = guidetree.cmd:main")

with open("README.md", "r") as f:
    long_description = f.read()

setup(
    name="guidetree",
    version="1.0.0",
    description="Neighbor-joining guide trees for progressive multiple "
                "sequence alignment",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="GPLv2",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "License :: OSI Approved :: GNU General Public License v2 (GPLv2)",
        "Environment :: Console",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3"
    ],

    python_requires='>=3.9',
    install_requires=["numpy>=1.6.1"],
    extras_require={
        "test": ["pytest>=7.0"]
    },
    packages=["guidetree", "guidetree.core", "guidetree.container",
              "guidetree.util"],
    entry_points={
      "console_scripts": console_scripts
    }
)
