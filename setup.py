from glob import glob
from setuptools import setup


setup(
    name='clc',
    use_scm_version={
        # Building from a tarball or a checkout without tags.
        'fallback_version': '1.1.0',
    },
    description='Width and unit aware command line calculator',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    packages=['clc'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.9',
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    setup_requires=[
        'setuptools_scm',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
