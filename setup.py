# Copyright (c) 2015 Nicolas JOUANIN
#
# See the file license.txt for copying permission.

from setuptools import setup, find_packages
from mqttconnack.version import get_version

setup(
    name="mqtt-connack",
    version=get_version(),
    description="MQTT 3.1/3.1.1 CONNACK packet codec using Python asyncio",
    author="Nicolas Jouanin",
    author_email='nico@beerfactory.org',
    license='MIT',
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'scripts': ['*.yaml'],
    },
    include_package_data=True,
    platforms='all',
    python_requires='>=3.8',
    install_requires=[
        'websockets',
        'docopt',
        'pyyaml'
    ],
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: POSIX',
        'Operating System :: MacOS',
        'Operating System :: Microsoft :: Windows',
        'Programming Language :: Python :: 3',
        'Topic :: Communications',
        'Topic :: Internet'
    ],
    entry_points={
        'console_scripts': [
            'mqtt_connack = scripts.connack_script:main',
        ]
    }
)
