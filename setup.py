# Copyright 2016-2025, Pulumi Corporation.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Policy Definition reconciler and Pulumi dynamic provider."""

from setuptools import setup, find_packages

VERSION = "1.0.0"

def readme():
    try:
        with open('README.md', encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        return "Policy Definition reconciler for Pulumi - Development Version"

setup(name='pulumi_policy_definition',
      version=VERSION,
      description='Eventually consistent Policy Definition reconciler and Pulumi dynamic provider',
      long_description=readme(),
      long_description_content_type='text/markdown',
      license='Apache 2.0',
      packages=find_packages(exclude=("test*",)),
      package_data={
          'pulumi_policy_definition': [
              'py.typed',
          ]
      },
      install_requires=[
          'pulumi>=3.157.0,<4.0.0',
      ],
      python_requires='>=3.9',
      zip_safe=False)
