"""NODAL setup script"""

__authors__ = ["Dominik Dahlem"]
__status__ = "Development"

from read_version import read_version
from setuptools import find_namespace_packages, setup

with open("README.md", "r") as fh:
    LONG_DESC = fh.read()
    setup(
        name="nodal",
        version=read_version("nodal", "__init__.py"),
        author="Dominik Dahlem",
        author_email="mail@dominik-dahlem.com",
        description="Lymph-node involvement and cancer recurrence analysis",
        long_description=LONG_DESC,
        long_description_content_type="text/markdown",
        url="",
        zip_safe=False,
        packages=find_namespace_packages(include=["nodal", "nodal.*"]),
        classifiers=[
            "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
            # In which environments to test this plugin
            "Programming Language :: Python :: 3.9",
            "Programming Language :: Python :: 3.10",
            "Programming Language :: Python :: 3.11",
            "Operating System :: OS Independent",
        ],
        install_requires=[
            "hydra-core",
            "hydra-colorlog",
            "omegaconf",
            "read_version",
            "numpy",
            "pandas",
            "scipy",
            "statsmodels>=0.14",
            "pathos",
            "logdecorator",
        ],
        extras_require={
            "test": ["pytest"],
        },
        include_package_data=True,
    )
