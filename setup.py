# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="navshell",
    version="1.0.0",
    description="Reactive navigation shell state and route-scoped warning counter",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["navshell", "navshell.*"]),
    install_requires=[
        "customtkinter",  # Main-loop dispatcher for the desktop shell
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'navshell=navshell.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
