from setuptools import setup, find_packages

setup(
    name='kubeprep',
    version='0.1.0',
    packages=find_packages(exclude=['kubeprep.tests', 'kubeprep.tests.*']),
    include_package_data=True,
    install_requires=[
        'typer',
        'pyyaml',
        'jsonschema',
        'python-dotenv',
        'requests'
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'kubeprep=kubeprep.cli:run'
        ]
    },
    author='Your Name',
    description='Provision Red Hat family hosts for Kubernetes with CRI-O and kubeadm',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: POSIX :: Linux',
    ],
    python_requires='>=3.8',
)
