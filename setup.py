from setuptools import setup, find_packages

setup(
    name="ventureval",
    version="0.1.0",
    description="Risk-adjusted DCF and comparable-multiple valuation engine for early-stage companies",
    packages=find_packages(),
    install_requires=[
        "pandas", "numpy"
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
)
