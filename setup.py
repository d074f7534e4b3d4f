from setuptools import setup, find_namespace_packages

setup(
    name='seneparking',
    version='0.0.1',
    description='Nearby parking lots map core',
    author='SeneParking',
    packages=find_namespace_packages(include=('seneparking', 'seneparking.*', 'devserver', 'devserver.*')),
    python_requires='>=3.8',
    install_requires=[
        'attrs',
        'geopy>=2.0',
        'tornado>=6.0',
    ],
    extras_require={
        'test': ['pytest', 'pytest-asyncio>=0.21'],
    },
)
