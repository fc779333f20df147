# Copyright (c) 2015 Nicolas JOUANIN
#
# See the file license.txt for copying permission.

VERSION = (0, 1, 0, 'final', 0)


def get_version(version=None):
    """
    Return a PEP 440 compliant version number from VERSION
    """
    if version is None:
        version = VERSION
    assert len(version) == 5
    assert version[3] in ('alpha', 'beta', 'rc', 'final')

    main = '.'.join(str(x) for x in version[:3])
    sub = ''
    if version[3] != 'final':
        mapping = {'alpha': 'a', 'beta': 'b', 'rc': 'rc'}
        sub = mapping[version[3]] + str(version[4])
    return main + sub
