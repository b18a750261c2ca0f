#!/usr/bin/python

import re

from setuptools import setup, find_packages

with open('knnrec/__init__.py') as f:
    version = re.search(r"^__version__ = '([^']+)'",f.read(),re.M).group(1)

with open('README.rst') as f:
    long_description = f.read()

setup(packages=find_packages(),
      version=version,
      name='knnrec',
      package_dir={'':'.'},
      description='k-nearest neighbour recommender for like/dislike rating matrices',
      long_description=long_description,
      classifiers=['Development Status :: 4 - Beta',
                   'Environment :: Console',
                   'License :: OSI Approved :: BSD License',
                   'Operating System :: Unix',
                   'Programming Language :: Python :: 3',
                   'Topic :: Scientific/Engineering',],
      python_requires='>=3.8',
      install_requires=['numpy',
                        'scipy',
                        'scikit-learn'],
      extras_require={
          'test':['pytest'],
      },
      entry_points={
          'console_scripts':[
              'knnrec_recommend = knnrec.examples.recommend:main',
          ]},
)
