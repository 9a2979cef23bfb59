from pathlib import Path

import setuptools

readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setuptools.setup(
    name="pysww",
    version="0.1.0",
    description="python library for reading ANUGA SWW result files",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src"),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Hydrology",
    ],
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.20",
        "netCDF4>=1.5",
    ],
    extras_require={
        "pandas": ["pandas>=1.3"],
        "test": [
            "pytest>=7.0",
            "pandas>=1.3",
        ],
    },
    entry_points={
        "console_scripts": [
            "pysww=pysww.cli:main",
        ],
    },
)
