from setuptools import find_packages, setup
from pathlib import Path

setup(
    name="glyph_annotation",
    version=Path("./glyph_annotation/VERSION").read_text().strip(),
    packages=find_packages(include=["glyph_annotation", "glyph_annotation.*"]),
    package_data={"glyph_annotation": ["VERSION"]},
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "opencv-python-headless",
        "easydict",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "glyph_annotation=glyph_annotation.cli:main",
        ],
    },
)
