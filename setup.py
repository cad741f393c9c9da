# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="fccwtree",
    version="0.1.0",
    description="Merged source tree explorer for .fccw project workspaces",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["fccwtree", "fccwtree.*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'fccwtree=fccwtree.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
