from setuptools import setup, find_packages

setup(
    name="creativebuilder",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={
        "creativebuilder": ["core/*.json", "schemas/*.json"],
    },
    install_requires=[
        "click>=8.0.0",
        "requests>=2.25.0",
        "pillow>=9.0.0",
        "jsonschema>=4.0.0",
        "python-dotenv>=0.19.0",
        "google-genai>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "creativebuilder=creativebuilder.cli:main",
        ],
    },
    python_requires=">=3.9",
    description="AI ad creative builder for Meta image and video ads",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
