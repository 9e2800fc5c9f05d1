"""Setup script for streamjobs."""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
  long_description = fh.read()

setup(
  name="streamjobs",
  version="0.1.0",
  author="streamjobs Contributors",
  description="Job spec generation and job distributor labels for data streams DONs",
  long_description=long_description,
  long_description_content_type="text/markdown",
  packages=find_packages(include=["oracle", "oracle.*", "deploy", "deploy.*"]),
  py_modules=["streamjobs_cli"],
  package_data={"deploy.compiler": ["templates/*.j2"]},
  include_package_data=True,
  python_requires=">=3.11",
  install_requires=[
    "pydantic>=2.5",
    "jinja2>=3.1",
    "rich>=13.0.0",
  ],
  extras_require={
    "test": [
      "pytest>=7.4",
    ],
  },
  entry_points={
    "console_scripts": [
      "streamjobs=streamjobs_cli:main",
    ],
  },
  classifiers=[
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Topic :: Software Development :: Libraries",
    "License :: OSI Approved :: Apache Software License",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
  ],
)
