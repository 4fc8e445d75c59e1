from setuptools import setup, find_packages
import os
import io

PACKAGE = "pmfroot"
NAME = "PMFRoot"
DESCRIPTION = 'Layered root organ model for plant modelling frameworks, ' \
              'simulating root front advance, senescence, water and ' \
              'mineral nitrogen supply and the distribution of dry matter ' \
              'and nitrogen over the soil layers.'
AUTHOR = "Wageningen Environmental Research"
AUTHOR_EMAIL = 'info.wenr@wur.nl'
LICENSE="EUPL"
VERSION = "1.0.0"

here = os.path.abspath(os.path.dirname(__file__))


def read(*filenames, **kwargs):
    encoding = kwargs.get('encoding', 'utf-8')
    sep = kwargs.get('sep', '\n')
    buf = []
    for filename in filenames:
        with io.open(os.path.join(here, filename), encoding=encoding) as f:
            buf.append(f.read())
    return sep.join(buf)


long_description = read('README.rst')

setup(
    name=NAME,
    version=VERSION,
    license='EUPL',
    author=AUTHOR,
    install_requires=['numpy>=1.17',
                      'PyYAML>=5.1',
                      'pandas>=0.25',
                      'PyDispatcher>=2.0.5',
                      'traitlets-pcse==5.0.0.dev'],
    extras_require={'test': ['pytest']},
    author_email=AUTHOR_EMAIL,
    description=DESCRIPTION,
    long_description=long_description,
    packages=find_packages(include=[PACKAGE, PACKAGE + ".*"]),
    package_data={PACKAGE: ['conf/*.conf', 'tests/test_data/*']},
    platforms='any',
    test_suite='pmfroot.tests.make_test_suite',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: European Union Public Licence 1.2 (EUPL 1.2)',
        'Natural Language :: English',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Topic :: Scientific/Engineering']
)
