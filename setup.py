from setuptools import setup, find_packages

with open('README.md', 'r') as fh:
    long_description = fh.read()

setup(
    name='ndvimap',
    version='0.1.0',
    description='Weighted KDE maps of vegetation-index measurements',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=find_packages(include=['ndvimap', 'ndvimap.*']),
    python_requires='>=3.8',
    install_requires=['numpy', 'scipy', 'scikit-learn', 'astropy',
                      'matplotlib', 'PyYAML'],
    extras_require={'test': ['pytest']},
    entry_points={'console_scripts': ['ndvimap = ndvimap.report:main']},
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'Development Status :: 3 - Alpha',
        'Topic :: Scientific/Engineering :: GIS'
    ],
    keywords='ndvi kde',
)
