#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages

readme = """Emoji tools find emoji and emoji sequences in text the way
Unicode Technical Standard #51 defines them, classify codepoints by their
emoji properties and list emoji by group and subgroup."""

setup(name='emojitools',
      version='0.0.1',
      description='Emoji sequence matching and classification tools',
      license="Apache",
      long_description=readme,
      packages=find_packages(exclude=['tests']),
      include_package_data=True,
      python_requires='>=3.6',
      install_requires=[
          'fontTools',
      ],
      package_data={
          'emojitools': [
              'data/*',
          ]
      },
      entry_points={
          'console_scripts': [
              'emojiscan = emojitools.emojiscan:main',
          ]
      })
