#!/usr/bin/env python

from setuptools import setup

setup(
    name='asciinema-scenario',
    version='0.3.0',
    license='MIT',
    description='Create asciinema videos from a text file',
    long_description='Convert an annotated plain text scenario into an '
                     'asciicast v2 recording simulating a person typing the '
                     'commands, with an optional static SVG preview.',
    classifiers=[
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Operating System :: MacOS',
        'Operating System :: POSIX :: BSD',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: System :: Shells',
        'Topic :: Terminals'
    ],
    python_requires='>=3.5',
    packages=[
        'asciinema_scenario',
        'asciinema_scenario.tests'
    ],
    entry_points={
        'console_scripts': [
            'asciinema-scenario=asciinema_scenario.main:main',
        ]
    },
    include_package_data=True,
    install_requires=[
        'lxml',
        'wcwidth',
    ],
    extras_require={
        'test': [
            'pyte',
        ],
        'dev': [
            'coverage',
            'pylint',
            'pyte',
            'twine',
            'wheel',
        ]
    }
)
