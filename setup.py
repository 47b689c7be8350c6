from setuptools import setup, find_packages
import re

# Read version from paycal/__init__.py
with open('paycal/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='paycal',
    version=version,
    packages=find_packages(include=['paycal', 'paycal.*']),
    package_data={
        'paycal': ['config/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
        'python-dateutil>=2.8',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'pay-cal=paycal.cli.__main__:main',
        ],
    },
    author='Personal',
    description='Payroll calendar and paperwork deadline tools.',
    python_requires='>=3.10',
)
