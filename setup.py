"""
Setup module for nitfkit.
"""

import os
from setuptools import setup, find_packages

here = os.path.abspath(os.path.dirname(__file__))
# Get the long description from the README file
with open(os.path.join(here, 'README.md'), 'r') as f:
    long_description = f.read()


# Get the relevant setup parameters from the package
parameters = {}
with open(os.path.join(here, 'nitfkit', '__about__.py'), 'r') as f:
    exec(f.read(), parameters)


def my_package_data():
    package_list = []
    for root, dirs, files in os.walk(os.path.join(here, 'nitfkit')):
        if any(os.path.splitext(fil)[1] == '.xml' for fil in files):
            rel_dir = os.path.relpath(root, os.path.join(here, 'nitfkit')).replace('\\', '/')
            package_list.append(rel_dir + '/*.xml')
    return package_list


def my_test_suite():
    import unittest
    test_loader = unittest.TestLoader()
    test_suite = test_loader.discover('tests', top_level_dir='.')
    return test_suite


setup(name=parameters['__title__'],
      version=parameters['__version__'],
      description=parameters['__summary__'],
      long_description=long_description,
      long_description_content_type='text/markdown',
      packages=find_packages(exclude=('*tests*', )),
      include_package_data=True,
      package_data={'nitfkit': my_package_data()},
      url=parameters['__url__'],
      author=parameters['__author__'],
      author_email=parameters['__email__'],  # The primary POC
      install_requires=['numpy>=1.11.0'],
      extras_require={
          'tests': ['pytest'],
          'all': ['pytest']},
      zip_safe=False,  # Use of __path__ in the TRE registry, and package data, makes it unusable from zip
      test_suite="setup.my_test_suite",
      tests_require=[],
      classifiers=[
          'Development Status :: 4 - Beta',
          'Intended Audience :: Developers',
          'License :: OSI Approved :: MIT License',
          'Programming Language :: Python :: 3',
          'Programming Language :: Python :: 3.6',
          'Programming Language :: Python :: 3.7',
          'Programming Language :: Python :: 3.8',
          'Programming Language :: Python :: 3.9',
          'Programming Language :: Python :: 3.10'
      ],
      platforms=['any'],
      license='MIT')
