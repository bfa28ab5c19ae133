from setuptools import find_namespace_packages, setup

# Physical structure matches import path
packages = find_namespace_packages(
    where="packages", include=["enum_collections", "enum_collections.*"]
)

setup(
    name="enum-collections",
    version="0.1.0",
    description="Array-backed containers keyed by enum members",
    packages=packages,
    package_dir={"": "packages"},
    python_requires=">=3.11",
    install_requires=[
        "numpy",
        "pydantic>=2",
        "PyYAML",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
