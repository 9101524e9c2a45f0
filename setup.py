import setuptools

VERSION = '0.1.0'

setup_params = dict(
    name='caching-proxy',
    version=VERSION,
    author='Kenneth VanderLinde',
    author_email='kwvanderlinde@gmail.com',
    url='https://github.com/kwvanderlinde/caching-proxy',
    keywords='http proxy cache asgi',
    packages=setuptools.find_packages(exclude=['tests', 'tests.*']),
    description='An in-memory caching proxy for a single origin server',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    install_requires=[
        'requests~=2.31',
        'urllib3>=2,<3',
        'starlette>=0.37',
        'uvicorn>=0.29',
    ],
    extras_require={
        'dev': [
            'mockito~=1.5',
            'pytest~=8.0',
            'pytest-cov~=5.0',
            'ddt~=1.7',
            'httpx>=0.27',
        ]
    },
    entry_points={
        'console_scripts': [
            'caching-proxy = caching_proxy.cli:main',
        ],
    },
    python_requires='>=3.8',
    classifiers=[
        'Development Status :: 2 - Pre-Alpha',
        'Environment :: Web Environment',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Natural Language :: English',
        'Operating System :: OS Independent',

        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
    ],
)


if __name__ == '__main__':
    setuptools.setup(**setup_params)
