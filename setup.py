from setuptools import setup, find_packages

setup(
    name="othello-engine",
    version="0.1",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        'numpy>=1.19.0',
        'tqdm>=4.0.0',
    ],
    extras_require={
        'test': ['pytest>=6.0'],
    },
    entry_points={
        'console_scripts': [
            'othello=othello.cli:main',
        ],
    },
    python_requires='>=3.7',
)
