from setuptools import setup, find_packages


setup(
    name='maze3d',
    version="0.0.1",
    packages=[package for package in find_packages() if package.startswith('maze3d')],
    package_data={'maze3d': ['config/*.yaml']},
    install_requires=[
        "numpy",
        "Pillow",
        "pygame",
        "gymnasium",
        "hydra-core",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["maze3d=maze3d.main:main"],
    },
    python_requires=">=3.9",
    description='Random spanning tree mazes on 3D grids',
    author=''
)
