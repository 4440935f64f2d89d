from setuptools import setup, find_packages

setup(
    name='PokeDB',
    version='0.1',
    zip_safe=False,
    packages=find_packages(),
    install_requires=[
        'SQLAlchemy>=1.4',
        'requests>=2.20',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'pokedb = pokedb.main:setuptools_entry',
            'pokedb-seed = pokedb.main:seed_entry',
            'pokedb-refresh-sprites = pokedb.main:refresh_sprites_entry',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.12",
    ]
)
