#!/usr/bin/env python
# -*- coding: utf-8 -*-

from Crypto.Random import get_random_bytes


class ClsagError(Exception):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)


class DuplicateKey(ClsagError):
    """A member, or the ring, presents the same public key material twice"""


class MismatchedKeyLength(ClsagError):
    """Members disagree on the number of key layers"""


class MultipleSigners(ClsagError):
    pass


class NoSigner(ClsagError):
    pass


class EmptyRing(ClsagError):
    pass


class EmptyKeySet(ClsagError):
    """Key set without any layer, cannot be aggregated"""


class CryptoBackendError(ClsagError):
    """Failure reported by the group / hash primitives"""


class VerificationError(ClsagError):
    pass


class LengthMismatch(VerificationError):
    pass


class InvalidEncoding(VerificationError):
    pass


class ChallengeMismatch(VerificationError):
    """The recomputed challenge chain does not close"""


class KeyImageReused(ClsagError):
    def __init__(self, key_image, *args):
        super().__init__("Key image already seen: %s" % key_image.hex(), *args)
        self.key_image = key_image


class HashWrapper(object):
    def __init__(self, ctx):
        self.ctx = ctx

    def update(self, buf):
        if len(buf) == 0:
            return
        if isinstance(buf, bytearray):
            self.ctx.update(bytes(buf))
        else:
            self.ctx.update(buf)

    def copy(self):
        return HashWrapper(self.ctx.copy())

    def digest(self):
        return self.ctx.digest()

    def hexdigest(self):
        return self.ctx.hexdigest()


def random_bytes(by):
    """
    Generates X random bytes, returns byte-string
    :param by:
    :return:
    """
    return get_random_bytes(by)


def ct_eq_int(a, b):
    """
    1 if a == b else 0 for non-negative integers below 2^32, without a branch.
    Values differing by a multiple of 2^32 compare equal.
    :param a:
    :param b:
    :return:
    """
    x = (a ^ b) & 0xffffffff
    return ((x - 1) >> 32) & 1


def ct_select(flag, a, b):
    """
    Returns a if flag == 1, b if flag == 0. Works on integers.
    :param flag:
    :param a:
    :param b:
    :return:
    """
    return flag * a + (1 - flag) * b
