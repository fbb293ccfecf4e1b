# SPDX-FileCopyrightText: 2023 Mewbot Developers <mewbot@quicksilver.london>
#
# SPDX-License-Identifier: BSD-2-Clause

import os
import pathlib
import re

import setuptools

# Finding the right README.md and inheriting the licence
root_repo_dir = pathlib.Path(__file__).parent


def get_version():
    """
    Get a version string from environment variables, or the lynx package.

    The package is read rather than imported, as its dependencies may not
    be installed yet.

    :return:
    """

    if "RELEASE_VERSION" in os.environ:
        return os.environ["RELEASE_VERSION"]

    init = (root_repo_dir / "src" / "lynx" / "__init__.py").read_text(encoding="utf-8")
    return re.search(r'^__version__ = "([^"]+)"', init, re.MULTILINE).group(1)


with (root_repo_dir / "README.md").open("r", encoding="utf-8") as rmf:
    long_description = rmf.read()

with (root_repo_dir / "requirements.txt").open("r", encoding="utf-8") as rf:
    requirements = list(x for x in rf.read().splitlines(False) if x and not x.startswith("#"))

# Reading the LICENSE file and parsing the results
# LICENSE file should contain a symlink to the licence in the LICENSES folder
# Held in the root of the repo
license_file = root_repo_dir / "LICENSE.md"
if license_file.is_symlink():
    license_identifier = license_file.readlink().stem
else:
    with license_file.open("r", encoding="utf-8") as license_data:
        license_file = root_repo_dir / license_data.read().strip()
    license_identifier = license_file.stem

setuptools.setup(
    name="lynx-reporters",
    version=get_version(),
    python_requires=">=3.11",
    install_requires=requirements,
    extras_require={
        "test": ["pytest"],
    },

    author="MewBot Org",
    author_email="mewbot@quicksilver.london",
    maintainer="MewBot Org",
    maintainer_email="mewbot@quicksilver.london",

    description="Reporter selection and event fan-out for test runners",
    long_description=long_description,
    long_description_content_type="text/markdown",

    license=license_identifier,

    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src"),
    package_data={"": ["py.typed"]},
    # see https://packaging.python.org/en/latest/specifications/entry-points/
    entry_points={
        "console_scripts": [
            "lynx=lynx.__main__:main",
        ]
    },

    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",

        "Programming Language :: Python",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3 :: Only",

        f"License :: OSI Approved :: {license_identifier}",
        "Operating System :: OS Independent",
    ],
)
