from setuptools import setup, find_packages

setup(
    name="wavecodec",
    version="0.1.0",
    description="Reader and writer for canonical PCM WAV files",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main"],
    install_requires=[
        "numpy>=1.20.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.7",
    entry_points={
        "console_scripts": [
            "wavecodec=main:main",
        ],
    },
)
