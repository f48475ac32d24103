from setuptools import setup, find_packages

setup(
    name="keeper-calldata",
    version="0.1.0",
    description="ABI calldata encoder for the keeper price-feed contract",
    packages=find_packages(),
    install_requires=[
        "web3>=7.0.0",
        "eth-abi>=5.0.0",
        "eth-utils>=5.0.0",
        "jsonschema>=4.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "keeper-calldata=keeper_calldata.main:main",
        ],
    },
)
