from setuptools import setup, find_packages


setup(
    name='bonds_core',
    version='0.1',
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        'pydantic>=2',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
)
