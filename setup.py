from setuptools import setup, find_packages
setup(
    name="property_onboarding",
    version="0.1.0",
    packages=find_packages("src"),
    package_dir={"": "src"},
    include_package_data=True,
    package_data={"property_onboarding.schema": ["*.json"]},
    python_requires=">=3.11",
    install_requires=[
        "pydantic>=2.5",
        "jsonschema>=4.0",
        "python-dateutil>=2.8",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
