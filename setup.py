# setup.py
from setuptools import setup, find_packages

setup(
    name="repopacker",
    version="1.0.0",
    description="Pack a source repository into a single LLM-ready document",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.9",
    install_requires=[
        "tiktoken",
        "pathspec",
        "rjsmin",
        "rcssmin",
        "pyperclip",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'repopacker=repopacker.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
