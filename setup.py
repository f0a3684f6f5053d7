#    Licensed under the Apache License, Version 2.0 (the "License"); you may
#    not use this file except in compliance with the License. You may obtain
#    a copy of the License at
#
#         http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
#    WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
#    License for the specific language governing permissions and limitations
#    under the License.
import os

import setuptools

project = 'vfguard'


def parse_requirements(filename):
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), filename)
    with open(path) as f:
        lines = [line.split('#')[0].strip() for line in f]
    return [line for line in lines if line]


setuptools.setup(
      name=project,
      version='1.0.0',
      description='admission validation of SR-IOV network node policies',
      author='vfguard developers',
      classifiers=[
          'Intended Audience :: Information Technology',
          'Intended Audience :: System Administrators',
          'License :: OSI Approved :: Apache Software License',
          'Operating System :: POSIX :: Linux',
          'Programming Language :: Python',
          'Programming Language :: Python :: 3',
          ],
      packages=setuptools.find_packages(),
      python_requires='>=3.8',
      install_requires=parse_requirements('requirements.txt'),
      extras_require={
          'test': parse_requirements('test-requirements.txt'),
      },
      include_package_data=True,
      entry_points={
          'oslo.config.opts': [
              'vfguard.conf = vfguard.conf.opts:list_opts',
          ],
      },
      py_modules=[])
