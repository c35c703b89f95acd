""" hdkeys build script for setuptools.

"""

from setuptools import find_packages, setup  # type: ignore

import hdkeys

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=hdkeys.name,
    version=hdkeys.__version__,
    license=hdkeys.__license__,
    author=hdkeys.__author__,
    author_email=hdkeys.__author_email__,
    description="BIP32/BIP44/BIP49/BIP84 hierarchical deterministic keys",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"hdkeys": ["_data/*.json"]},
    install_requires=["coincurve", "dataclasses-json", "pycryptodome"],
    extras_require={"test": ["pytest"]},
    keywords=(
        "bitcoin bip32 bip44 bip49 bip84 slip132 hd-wallet "
        "extended-keys base58 secp256k1"
    ),
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
