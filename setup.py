from setuptools import find_packages, setup

setup(
    name="gffsbol",
    version="0.1.0",
    description="Conversion of annotated genomes in GFF3 format into SBOL documents",
    license="BSD-3-Clause",
    author="The gffsbol contributors",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "sbol2 >= 1.4",
    ],
    extras_require={
        "test": ["pytest", "rdflib"],
    },
    entry_points={
        "console_scripts": ["gffsbol = gffsbol.__main__:main"],
    },
)
