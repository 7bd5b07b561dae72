import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="dualroot",
    version="0.1.0",
    description="Real roots of scalar functions using a sign-change scan "
                "and Newton-Raphson refinement with automatic "
                "differentiation.",
    include_package_data=True,
    install_requires=[
        'numpy>=2.0'
    ],
    extras_require={
        'test': ['pytest', 'scipy'],
    },
    keywords='root finding newton automatic differentiation dual numbers',
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(include=['dualroot', 'dualroot.*']),
    python_requires='>=3.11',
    classifiers=[
        "Development Status :: 2 - Pre-Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Mathematics"
    ]
)
