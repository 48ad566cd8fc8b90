# -*- coding: utf-8 -*-
# Copyright (C) 2016 Cyan, Inc.
# Copyright (C) 2016-2021 Ciena Corporation

from setuptools import find_packages, setup

with open('README.md', 'r') as fin:
    readme_lines = fin.readlines()
long_description = ''.join(readme_lines[
    readme_lines.index('<!-- LONG_DESCRIPTION_START -->\n') + 1:
    readme_lines.index('<!-- LONG_DESCRIPTION_END -->\n'):
])

setup(
    name="doubleroundrobin",
    version="0.1.0",
    install_requires=[
        'attrs >= 19.2.0',
    ],
    python_requires='>=3.5, <4',
    extras_require={
        'test': ['Twisted >= 18.7.0', 'pytest'],
    },

    packages=find_packages(include=['doubleroundrobin', 'doubleroundrobin.*']),
    include_package_data=True,

    zip_safe=True,

    license="Apache License 2.0",
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: MacOS :: MacOS X',
        'Operating System :: POSIX',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
        'Programming Language :: Python :: Implementation :: PyPy',
        'Topic :: Communications',
        'Topic :: System :: Distributed Computing',
    ],

    description="Replica-aware double round-robin partition assignor for Kafka consumer groups",
    long_description=long_description,
    long_description_content_type='text/markdown',
    keywords=['Kafka', 'consumer group', 'partition assignment', 'round-robin'],
)
