from setuptools import setup, find_packages

with open("README.md", "r") as fh:
    LONG_DESCRIPTION = fh.read()

TESTS_REQUIRE = [
    "pytest",
    "pylint",
    "mock",
    "black>=20.8b1",
    "bandit",
    "pytest-xdist",
]

ECL_REQUIRE = [
    "ecl>=2.12",
]

setup(
    name="ensemble-quantiles",
    version="1.0.0",
    description="Quantiles of reservoir simulation summary vectors over an ensemble",
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/markdown",
    author="R&T Equinor",
    packages=find_packages(exclude=["tests", "tests.*"]),
    entry_points={
        "console_scripts": [
            "ecl_quantile = ensemble_quantiles.ecl_quantile:main",
        ]
    },
    install_requires=[
        "jsonschema>=3.2",
        "numpy>=1.19",
        "pandas>=1.1",
        "pyarrow>=5.0",
        "pyyaml>=5.3",
    ],
    tests_require=TESTS_REQUIRE,
    extras_require={"tests": TESTS_REQUIRE, "ecl": ECL_REQUIRE},
    python_requires=">=3.8",
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "Natural Language :: English",
        "Environment :: Console",
        "Topic :: Scientific/Engineering",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
    ],
)
