import setuptools

with open("README.md", "r") as file:
    readme = file.read()

requires = [
    "strax",
    "straxen",
    "numpy",
    "numba",
    "pandas",
    "scipy",
    "immutabledict",
]

tests_requires = [
    "pytest",
    "timeout_decorator",
]

setuptools.setup(
    name="arquanta",
    version="0.1.0",
    description="Ionization electrons and scintillation photons of energy deposits in liquid argon",
    author="arquanta contributors",
    long_description=readme,
    long_description_content_type="text/markdown",
    install_requires=requires,
    extras_require={"test": tests_requires},
    python_requires=">=3.9",
    packages=setuptools.find_packages(include=["arquanta", "arquanta.*"]),
    classifiers=[
        "Natural Language :: English",
        "Programming Language :: Python :: 3",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Scientific/Engineering :: Physics",
    ],
    zip_safe=False,
)
