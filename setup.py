from setuptools import setup, find_packages
from annotab.__version import __version__

with open('README.md') as readme:
    setup(
        name='annotab',
        version=__version__,
        packages=find_packages(exclude=('tests', 'tests.*')),
        long_description=readme.read(),
        long_description_content_type='text/markdown',
        license='MIT',
        description='Parsers and writers for annotated tab-delimited bioinformatics formats: SAM, PAF, GFA and VCF header lines',
        python_requires='>=3.6',
        extras_require={
            'test': ['pytest'],
        },
        include_package_data=True
    )
