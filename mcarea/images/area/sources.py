'''
Strategies to turn a locator into an object we can read bytes from.

An opener is any callable taking the locator and returning a binary
file-like object; the decoder tries them in order and uses the first
one that succeeds.
'''
import logging
import os

import fsspec

from ...exceptions import OpenError


logger = logging.getLogger(__name__)

LOCAL_BUFFERING = 2048


def open_local_file(locator, buffering=LOCAL_BUFFERING):
    return open(os.fspath(locator), 'rb', buffering=buffering)


def open_remote_resource(locator):
    '''Any URL fsspec knows about (http(s)://, s3://, ...)'''
    return fsspec.open(os.fspath(locator), mode='rb').open()


DEFAULT_OPENERS = (
    open_local_file,
    open_remote_resource,
)


def open_source(locator, openers=None):
    causes = []
    for opener in openers or DEFAULT_OPENERS:
        try:
            obj = opener(locator)
        except Exception as e:  # openers are pluggable, any failure means "next one"
            logger.debug('%s failed to open \'%s\': %s', getattr(opener, '__name__', opener), locator, e)
            causes.append(e)
            continue

        logger.debug('\'%s\' opened with %s', locator, getattr(opener, '__name__', opener))

        return obj

    raise OpenError('Error opening AreaFile \'%s\': %s' % (
        locator, '; '.join(str(_) for _ in causes)), causes=causes) from (causes[-1] if causes else None)
