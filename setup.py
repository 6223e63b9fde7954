"""
Setup configuration for the MKT Device Info Reader.

Probes serial ports, negotiates the baud rate of an AT-command device
and reads its device information string.

It can be installed via:
    - pip install .
    - pip install -e .  (for development)
    - pip install -e .[gui,dev]  (window + test tooling)
"""

from setuptools import setup, find_packages

package_name = 'mktinfo'

setup(
    name=package_name,
    version='1.0.0',
    packages=find_packages(exclude=['test', 'tests']),

    install_requires=[
        'setuptools',
        'pyserial>=3.5',
    ],

    extras_require={
        'gui': [
            'PyQt6>=6.4.0',
        ],
        'dev': [
            'pytest>=7.0',
            'pytest-cov',
            'pytest-timeout',
        ],
    },

    zip_safe=True,

    description='Serial port scanner, baud rate detector and AT device info reader',
    long_description=open('README.md').read() if __import__('os').path.exists('README.md') else '',
    long_description_content_type='text/markdown',
    license='MIT',

    tests_require=['pytest'],

    entry_points={
        'console_scripts': [
            'mktinfo = mktinfo.cli:main',
        ],
        'gui_scripts': [
            'mktinfo-gui = mktinfo.__main__:main',
        ],
    },

    python_requires='>=3.8',

    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Topic :: System :: Hardware',
        'Topic :: Terminals :: Serial',
    ],
)
