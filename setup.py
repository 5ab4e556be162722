from setuptools import find_packages, setup

setup(
    name="eulerangles",
    version="0.1.0",
    description="Generalized Euler angles for n-dimensional orthonormal matrices.",
    packages=find_packages(include=["eulerangles", "eulerangles.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.21",
        "matplotlib>=3.5",
    ],
    extras_require={
        "test": [
            "pytest>=7",
            "scipy>=1.8",
        ],
    },
)
