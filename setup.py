#!/usr/bin/env python3

import os
from setuptools import setup, find_packages


here = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(here, 'README.md')) as f:
    README = f.read()

if __name__ == "__main__":
    setup(
        name = 'openstack-scaler',
        version = '0.1.0',
        description = 'OpenStack metric sources for autoscaling hosts.',
        long_description = README,
        long_description_content_type = 'text/markdown',
        classifiers = [
            "Programming Language :: Python",
            "Programming Language :: Python :: 3",
            "Topic :: System :: Distributed Computing",
        ],
        keywords = 'openstack keystone gnocchi aodh swift autoscaling',
        packages = find_packages(include = ['openstack_scaler', 'openstack_scaler.*']),
        include_package_data = True,
        zip_safe = False,
        python_requires = '>=3.10',
        install_requires = [
            'httpx',
            'pyyaml',
            'django',
            'django-settings-object',
        ],
        extras_require = {
            'test': [
                'pytest',
            ],
        },
    )
