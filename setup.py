import io
import os

from setuptools import setup, find_packages


version = "0.1.0"

install_requires = [
    "monero-serialize>=3.0.1",
    "pycryptodome",
]

dev_extras = [
    "aiounittest",
    "pytest",
    "pep8",
    "tox",
]

test_extras = [
    "aiounittest",
    "pytest",
]

docs_extras = [
    "Sphinx>=1.0",  # autodoc_member_order = 'bysource', autodoc_default_flags
    "sphinx_rtd_theme",
]


CWD = os.path.dirname(os.path.realpath(__file__))

try:
    with io.open(os.path.join(CWD, "README.md"), encoding="utf-8") as f:
        long_description = f.read()
except IOError:
    long_description = ""

setup(
    name="clsag_glue",
    version=version,
    description="CLSAG multi-layer linkable ring signatures over Ristretto255",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license='MIT',
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Security :: Cryptography",
    ],
    packages=find_packages(exclude=["clsag_glue_test"]),
    include_package_data=True,
    python_requires=">=3.6",
    install_requires=install_requires,
    extras_require={
        "dev": dev_extras,
        "test": test_extras,
        "docs": docs_extras,
    },
)
