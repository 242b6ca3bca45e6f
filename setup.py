"""Setup script for the record helpers package."""
from setuptools import setup, find_packages

setup(
    name="record-helpers",
    version="1.0.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "flask>=2.0.0",
        "markupsafe>=2.0.0",
        "python-dotenv>=0.19.0",
        "PyYAML>=5.4",
    ],
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": ["record-helpers=record_helpers.__main__:main"],
    },
    python_requires=">=3.8",
    description="Citation and icon view helpers for bibliographic records",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    keywords="citation bibliography apa mla chicago icons",
    include_package_data=True,
    classifiers=[
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Topic :: Text Processing :: Markup",
    ],
)
