# -*- coding: utf-8 -*-
#
#    BsvExplorer - Python Bitcoin SV Block Explorer Client
#    PyPi Setup Tool
#    © 2023 November - 1200 Web Development <http://1200wd.com/>
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU Affero General Public License as
#    published by the Free Software Foundation, either version 3 of the
#    License, or (at your option) any later version.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU Affero General Public License for more details.
#
#    You should have received a copy of the GNU Affero General Public License
#    along with this program.  If not, see <http://www.gnu.org/licenses/>.
#

from setuptools import setup
from codecs import open
import os

here = os.path.abspath(os.path.dirname(__file__))
version = open(os.path.join(here, 'bsvexplorer', 'config', 'VERSION'), encoding='utf-8').read().strip()

# Get the long description from the relevant file
readmetxt = ''
try:
      with open(os.path.join(here, 'README.rst'), encoding='utf-8') as f:
          readmetxt = f.read()
except IOError:
      pass

kwargs = {}


install_requires = [
      'requests>=2.25.0',
      'SQLAlchemy>=1.4.28',
      'bitcoinlib>=0.6.14',
]

kwargs['install_requires'] = install_requires
kwargs['extras_require'] = {
      'test': ['pytest>=7.0'],
}

setup(
      name='bsvexplorer',
      version=version,
      description='Bitcoin SV Block Explorer Client for Bitails, BSV Direct, ElectrumX and Whatsonchain',
      long_description=readmetxt,
      classifiers=[
            'Development Status :: 4 - Beta',
            'License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)',
            'Intended Audience :: Developers',
            'Intended Audience :: Financial and Insurance Industry',
            'Intended Audience :: Information Technology',
            'Natural Language :: English',
            'Operating System :: OS Independent',
            'Programming Language :: Python :: 3.8',
            'Programming Language :: Python :: 3.9',
            'Programming Language :: Python :: 3.10',
            'Programming Language :: Python :: 3.11',
            'Topic :: Software Development :: Libraries :: Python Modules',
            'Topic :: Internet :: WWW/HTTP',
      ],
      url='http://github.com/1200wd/bsvexplorer',
      author='1200wd',
      author_email='info@1200wd.com',
      license='GNU3',
      packages=['bsvexplorer', 'bsvexplorer.config', 'bsvexplorer.services'],
      package_data={'bsvexplorer': ['config/VERSION', 'config/config.ini.example']},
      test_suite='tests',
      include_package_data=True,
      keywords='bitcoin bsv block explorer api client whatsonchain bitails electrumx',
      zip_safe=False,
      **kwargs
)
