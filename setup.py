"""
Setup script for fluidsim package.
"""

from setuptools import setup, find_namespace_packages

setup(
    name="fluidsim",
    version="0.1.0",
    description="Interactive D2Q9 Lattice Boltzmann fluid on a bounded lattice",
    author="Andrey",
    packages=find_namespace_packages(include=["fluidsim*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.20",
        "numba>=0.56",
        "matplotlib>=3.5",
    ],
    extras_require={
        "dev": ["pytest>=7.0", "black", "flake8"],
    },
)
