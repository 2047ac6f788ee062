from setuptools import setup, find_packages

setup(
    name='kv_facade',
    version='1.0.0',
    description='kv_facade: HTTP façade over a key-value store',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    packages=find_packages(include=['kv_facade', 'kv_facade.*']),
    install_requires=[         # Add dependencies from requirements.txt
        line.strip() for line in open('requirements.txt').readlines() if line.strip()
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'kv-facade=kv_facade.__main__:main',
        ],
    },
    python_requires='>=3.8,<3.14',
    license='BSD-3-Clause'
)
