from setuptools import setup


setup_options = dict(
    name="ecefins",
    version="0.1",
    description="Strapdown inertial navigation in Earth-centered Earth-fixed frame",
    license="MIT",
    packages=["ecefins"],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
    ],
    python_requires=">=3.8",
    install_requires=["numpy", "scipy", "pandas", "numba"],
    extras_require={"test": ["pytest"]},
)

setup(**setup_options)
