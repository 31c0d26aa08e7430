from setuptools import find_packages, setup

setup(
    name="quill-reader",
    version="0.1.0",
    description="Reader for the Quill Lisp: source text to expression trees",
    packages=find_packages(include=["quill", "quill.*"]),
    python_requires=">=3.9",
    install_requires=[],
)
