from setuptools import setup, find_packages

setup(
    name="colorline",
    version="1.0.0",
    author="Sanic Community",
    author_email="tronic@noreply.users.github.com",
    description="ANSI-colored log lines with readable exception chains",
    long_description=open("README.md", encoding="UTF-8").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["colorline", "colorline.*"]),
    python_requires=">=3.9",
    classifiers = [
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    install_requires = [],
    extras_require = {
        "test": ["pytest", "coverage"],
    },
)
