import setuptools
from setuptools import setup

import DeformableBodies


#### Get/Set info to be passed into setup() ####
with open("README.md", "r") as fh:
    long_description = fh.read()

with open("requirements.txt") as reqFile:
    install_reqs = [ line.strip() for line in reqFile if line.strip() != "" and not line.startswith("#") ]

setup(
    name='DeformableBodies',
    version=DeformableBodies.__version__,
    description="Reconstructs the inertial-frame rotation of shape-changing bodies from their motion in a deforming body frame",
    install_requires=install_reqs,
    extras_require={
        "test": [ "pytest" ],
    },
    license='MIT',
    long_description = long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=[ "test", "test.*", ]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Natural Language :: English",
        "Topic :: Scientific/Engineering :: Physics",
    ],
    include_package_data=True,

    python_requires='>=3.7',

    zip_safe=False,
)
