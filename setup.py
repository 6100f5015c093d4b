from setuptools import setup, find_packages

setup(
    name="convergent",
    version="0.1.0",
    description="State-based CRDT primitives: grow-only counter, grow-only set, LWW element set",
    author="adamfilli",
    packages=find_packages(include=["convergent", "convergent.*"]),
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
