import io

import setuptools

name = 'chaosazure'
desc = 'Chaos monkey for Azure virtual machines.'

author = "chaosazure contributors"

packages = [
    'chaosazure',
    'chaosazure.actions',
    'chaosazure.common',
    'chaosazure.probes'
]

test_require = []
with io.open('requirements-dev.txt') as f:
    test_require = [l.strip() for l in f if l.strip() and not l.startswith('#')]

install_require = []
with io.open('requirements.txt') as f:
    install_require = [l.strip() for l in f if l.strip() and not l.startswith('#')]

setup_params = dict(
    name=name,
    version='0.1.0',
    description=desc,
    author=author,
    packages=packages,
    install_requires=install_require,
    tests_require=test_require,
    extras_require={'test': test_require},
    entry_points={
        'console_scripts': ['chaosazure = chaosazure.cli:main']
    },
    python_requires='>=3.8'
)


def main():
    """Package installation entry point."""
    setuptools.setup(**setup_params)


if __name__ == '__main__':
    main()
