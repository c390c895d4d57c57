from setuptools import find_packages, setup


def get_version():
    # type: () -> str
    '''
    Retrieves the version information for this package.
    '''
    filename = 'printsnmp/version.py'

    with open(filename) as fptr:
        # pylint: disable=invalid-name, exec-used
        obj = compile(fptr.read(), filename, 'single')
        data = {}  # type: ignore
        exec(obj, data)
    return data['VERSION']


VERSION = get_version()
DEPENDENCIES = [
    'x690 >= 1.0',
    'typing_extensions',
]

TEST_DEPENDENCIES = [
    'pytest-xdist',
    'pytest',
    'pytest-coverage'
]

setup(
    name="printsnmp",
    version=VERSION,
    description="SNMPv2c GETBULK walks of the Printer-MIB",
    long_description=open("README.rst").read(),
    provides=['printsnmp'],
    license="MIT",
    include_package_data=True,
    package_data={
        'printsnmp': ['py.typed']
    },
    install_requires=DEPENDENCIES,
    extras_require={
        'dev': [],
        'test': TEST_DEPENDENCIES
    },
    packages=find_packages(exclude=["tests.*", "tests", "docs"]),
    python_requires='>=3.7',
    keywords="networking snmp printer",
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Intended Audience :: System Administrators',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Printing',
        'Topic :: System :: Networking',
        'Topic :: System :: Networking :: Monitoring',
        'Topic :: System :: Systems Administration',
    ]
)
