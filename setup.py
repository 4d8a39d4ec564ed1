import os
import sys
from setuptools import setup

package_name = "git_author_stats"

HERE = os.path.abspath(os.path.dirname(__file__))
README = os.path.join(HERE, "README.rst")
REQS = os.path.join(HERE, "requirements.txt")

sys.path.insert(0, os.path.join(HERE, package_name))
import version

with open(README, 'r') as fh:
    long_description = fh.read()

with open(REQS, 'r') as fh:
    requirements = [r.strip() for r in fh.readlines() if r.strip()]

version_str = version.version.strip()

setup(
    name=package_name,
    version=version_str,
    description=('Per-author commit, insertion and deletion counts for a '
                 'git repository'),
    long_description=long_description,
    license='Apache 2.0',
    packages=[package_name],
    python_requires='>=3.7',
    install_requires=requirements,
    extras_require={
        'test': ['pytest']
    },
    include_package_data=True,
    entry_points={
        'console_scripts': [
            'git-author-stats=git_author_stats.author_stats:main'
        ]
    }
)
