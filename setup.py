"""Setup script for Hopfield Memory.

This setup.py provides compatibility for users who prefer pip over Poetry or Guix.
Install with: pip install .
Install with dev dependencies: pip install .[dev]
"""

from setuptools import find_packages, setup

with open("README.md", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="hopfield-memory",
    version="0.1.0",
    author="Ayan Das",
    author_email="bvits@riseup.net",
    description="Discrete Hopfield associative memory on PyTorch tensors",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    keywords=[
        "pytorch",
        "associative-memory",
        "hopfield-networks",
        "energy-based-models",
        "hebbian-learning",
    ],
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "hopfield": ["py.typed"],  # Include type hints
    },
    include_package_data=True,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
    ],
    python_requires=">=3.11",
    install_requires=[
        # Dense tensor backend
        "torch>=2.0.0,<3.0.0",  # PyTorch 2.8.0 in Guix
        "numpy>=1.24.0,<3.0.0",  # 1.26.4 in Guix
        # General utilities
        "tqdm>=4.60.0,<5.0.0",  # 4.67.1 in Guix
        # Experiment configuration
        "hydra-core>=1.3.0,<2.0.0",  # 1.3.2 in Guix
    ],
    extras_require={
        "dev": [
            "pytest>=8.0.0,<9.0.0",  # 8.3.3 in Guix
            "pytest-cov>=6.0.0,<7.0.0",  # 6.2.1 in Guix
            "ruff>=0.9.0,<1.0.0",  # 0.9.5 in Guix
        ],
    },
)
