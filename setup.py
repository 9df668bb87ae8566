from setuptools import setup, find_packages

setup(
    name="photo-albums",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "Pillow>=9.0.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "tests": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
)
