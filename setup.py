from setuptools import setup, find_packages
import re

# Read version from shiftpay/__init__.py
with open('shiftpay/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='shiftpay',
    version=version,
    packages=find_packages(include=['shiftpay', 'shiftpay.*']),
    package_data={
        'shiftpay.sdk.taxes': ['rules/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'shiftpay=shiftpay.cli.__main__:main',
        ],
    },
    author='Personal',
    description='Paycheck estimates from clock-in/clock-out records.',
    python_requires='>=3.10',
)
