"""Setup script for gpue package."""

from setuptools import setup, find_packages

setup(
    name='gpue',
    version='0.1',
    packages=find_packages(include=['gpue', 'gpue.*']),
    package_data={'gpue.config': ['defaults.yaml']},
    python_requires='>=3.10',
    install_requires=[
        'numpy>=1.20.0',
        'scipy>=1.9.0',
        'pyyaml>=6.0',
    ],
    extras_require={
        'gpu': ['cupy>=12.0'],
        'test': ['pytest>=7.0'],
    },
)
