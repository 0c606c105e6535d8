"""Install the tokenauth gate."""

from setuptools import setup, find_packages

setup(
    name='tokenauth',
    version='0.1.0',
    packages=find_packages(exclude=['*test*']),
    install_requires=[
        "flask",
        "werkzeug",
        "python-json-logger>=3.1",
    ],
    extras_require={
        "test": ["pytest"],
    },
    zip_safe=False
)
