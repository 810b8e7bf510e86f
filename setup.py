#!/usr/bin/env python

from setuptools import setup, find_packages


if __name__ == "__main__":
    # the configuration file is created at ~/HiCARS/config.ini on first run of the hicars command
    setup(
        name="hicars",
        version="0.1.0",
        description="UTIG HiCARS radar ingest, high/low gain channel merge and fast time calibration",
        author="HiCARS developers",
        license="GPL-3.0",
        packages=find_packages(where="src"),
        package_dir={"": "src"},
        python_requires=">=3.8",
        install_requires=[
            "numpy",
            "scipy",
            "pandas",
            "h5py",
        ],
        extras_require={
            "test": [
                "pytest",
            ],
        },
        entry_points={
            "console_scripts": [
                "hicars=hicars.bin.hicars:main",
            ],
        },
    )
