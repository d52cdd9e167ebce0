from setuptools import setup, find_packages

__version__ = '0.0.1'

setup(name='restgate',
      version=__version__,
      description=('RESTful resource dispatch: routes each HTTP request to '
                   'the resource operation matching its verb and answers '
                   'with the JSON encoded result. Ships a small asyncio '
                   'HTTP server to host resources.'),
      author='Matt Rasband, Nick Humrich',
      author_email='matt.rasband@gmail.com',
      license='Apache-2.0',
      url='',
      download_url='',
      keywords=(
          'rest',
          'resource',
          'json',
          'asyncio',
      ),
      packages=find_packages(exclude=('tests', 'tests.*')),
      python_requires='>=3.8',
      classifiers=[
          'Programming Language :: Python :: 3',
          'License :: OSI Approved :: Apache Software License',
          'Intended Audience :: Developers',
          'Development Status :: 2 - Pre-Alpha',
          'Topic :: Internet :: WWW/HTTP :: HTTP Servers',
      ],
      install_requires=[
          'httptools>=0.6',
          'multidict>=6.0',
          'uvloop>=0.17',
      ],
      extras_require={
          # pytest-asyncio runs the dispatcher coroutines, aiohttp is the
          # client for the end to end server tests
          'test': [
              'pytest',
              'pytest-asyncio',
              'aiohttp>=3.8',
              'flake8',
          ],
      },
      entry_points={},
      zip_safe=False)
