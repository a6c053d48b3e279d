from setuptools import setup, find_packages
import os

# Read the long description from README.md if it exists
long_description = ""
if os.path.isfile("README.md"):
    with open("README.md", "r", encoding="utf-8") as f:
        long_description = f.read()

setup(
    name='wp_env',
    version='0.1.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    author='wp_env developers',
    description='Read, validate and resolve wp-env development environment configuration files',
    long_description=long_description,
    long_description_content_type='text/markdown',
    license='GPLv3',
    keywords=['wordpress', 'wp-env', 'configuration', 'development environment'],

    # Runtime dependencies:
    install_requires=[
        'PyYAML>=5.1',           # For dumping the resolved configuration
    ],
    extras_require={
        'test': [
            'pytest>=6.0',
        ],
    },

    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Topic :: Software Development :: Build Tools',
    ],

    python_requires='>=3.8',
    include_package_data=True,
    zip_safe=False,
)
