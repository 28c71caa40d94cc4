from setuptools import setup, find_packages

try:
    with open("README.md", "r") as fh:
        long_description = fh.read()
except FileNotFoundError:
    long_description = "BLAST Skin Tools - compare skin bacterial communities from BLAST output"

setup(
    name="blast_skin_tools",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        # Core data processing
        "pandas>=1.5.0",
        "numpy>=1.20.0",
        "scipy>=1.7.0",

        # Statistical libraries
        "scikit-posthocs>=0.7.0",
        "statsmodels>=0.13.0",

        # Visualization
        "matplotlib>=3.4.0",
        "seaborn>=0.11.2",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'blast-skin-tools=blast_skin_tools.cli.main_cli:main',
            'blast-skin-join=blast_skin_tools.cli.join_cli:main',
            'blast-skin-report=blast_skin_tools.cli.report_cli:main',
        ],
    },
    description="Join BLAST tabular output with SRA run metadata and compare skin microbiomes by sex",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "Intended Audience :: Science/Research",
    ],
    python_requires=">=3.8",
)
