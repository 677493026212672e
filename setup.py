from setuptools import setup, find_packages

setup(
    name="bitmap-writer",
    version="0.1.0",
    description="Build 24-bit images in memory and write them as uncompressed BMP files",
    author="Garrett Johnson",
    packages=find_packages(include=["bitmap_writer", "bitmap_writer.*"]),
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.23.0",
    ],
    extras_require={
        "test": [
            "pytest",
            "Pillow>=9.2.0",
        ],
    },
)
