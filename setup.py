from setuptools import setup, find_packages

setup(
    name='pypolya',
    version='0.1.0',
    description='Polya (Dirichlet-multinomial) fitting and ternary plots for opening book analysis',
    long_description="""
    pyPolya fits a Dirichlet distribution to the win / draw / loss counts of
    chess openings played in engine self-play, using Minka's fixed-point
    maximum-likelihood estimate for the Dirichlet-multinomial (Polya) model,
    and renders ternary plots of the observed outcomes and of the fitted
    density.

    Features:
    - Fixed-point Polya fitting with a scikit-learn style interface
    - Dirichlet density evaluation on the 2-simplex
    - Ternary plot geometry and triangular mesh shading
    - PGN aggregation and SVG output from the command line
    """,
    long_description_content_type='text/plain',
    author='Your Name',
    author_email='your.email@example.com',
    url='https://github.com/your-username/pyPolya',
    packages=find_packages('src'),
    package_dir={'': 'src'},
    install_requires=[
        'numpy>=1.19.0',
        'pandas>=1.0.0',
        'scipy>=1.5.0',
        'scikit-learn>=1.0',
        'matplotlib>=3.3',
        'chess>=1.0',
        'loguru>=0.5',
    ],
    extras_require={
        'dev': [
            'pytest>=6.0',
            'pytest-cov>=2.10',
        ],
        'test': [
            'pytest>=6.0',
            'pytest-cov>=2.10',
        ]
    },
    entry_points={
        'console_scripts': [
            'pypolya=pypolya.cli:main',
        ],
    },
    python_requires='>=3.7',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Science/Research',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.7',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Topic :: Scientific/Engineering :: Mathematics',
        'Topic :: Games/Entertainment :: Board Games',
    ],
    keywords='dirichlet multinomial polya ternary plot chess opening',
    zip_safe=False,
)
