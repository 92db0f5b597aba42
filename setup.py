from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="argbench",
    version="0.1.0",
    description="Rosenbrock benchmark objectives and a reference optimizer driver",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    platforms=["Any"],
    packages=find_packages(include=["argbench", "argbench.*"]),
    include_package_data=True,

    # --- Python version support ---
    python_requires=">=3.10",

    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],

    install_requires=[
        "torch",
        "numpy",
        "matplotlib",
        "scipy>=1.11",
        "optuna>=3.6.0,<5.0.0",
        "rich",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["argbench=argbench.cli:main"],
    },
)
