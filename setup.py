#!/usr/bin/env python3
"""Setup script for the Jira epic cloning service.
"""

from setuptools import find_packages, setup

# Read requirements from requirements.txt file
with open("requirements.txt") as f:
    requirements = f.read().splitlines()

# Remove any comments or blank lines from requirements
requirements = [line for line in requirements if line and not line.startswith("#")]

setup(
    name="jira-epic-cloner",
    version="0.1.0",
    description="HTTP service that clones a Jira epic and its child issues into a project",
    packages=find_packages(include=["epic_cloner", "epic_cloner.*"]),
    include_package_data=True,
    python_requires=">=3.11,<4.0",
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=8.0",
            "httpx>=0.27",
        ],
    },
    license="MIT",  # SPDX license identifier
    entry_points={
        "console_scripts": [
            "epic-cloner=epic_cloner.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
)
