#!/usr/bin/env python3

from setuptools import setup

setup(
    name="pngme",
    version="1.0.0",
    description='Hide messages in the chunks of a png file',
    long_description="""A pure python package and command line tool to encode, decode
    and remove messages stored in custom png chunks, without touching the image data""",
    license='GPL-3.0',
    classifiers=[
        #   3 - Alpha
        #   4 - Beta
        #   5 - Production/Stable
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: Libraries',
        'License :: OSI Approved :: GNU General Public License (GPL)',
        'Programming Language :: Python :: 3',
    ],
    keywords='png chunk steganography message',
    packages=["pngme"],
    install_requires=['requests'],
    extras_require={'test': ['pytest']},
    entry_points={'console_scripts': ['pngme=pngme.cli:main']},
    python_requires='>=3.9',
    package_data={},
    data_files=[],
)
