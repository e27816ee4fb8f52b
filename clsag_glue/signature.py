#!/usr/bin/env python
# -*- coding: utf-8 -*-

import binascii
import logging

from clsag_glue import crypto, transcript
from clsag_glue.common import (
    ChallengeMismatch,
    EmptyKeySet,
    EmptyRing,
    InvalidEncoding,
    LengthMismatch,
    MismatchedKeyLength,
)
from clsag_glue.keys import PublicSet
from monero_serialize import xmrserialize
from monero_serialize.core.int_serialize import load_uvarint_b, uvarint_size

logger = logging.getLogger(__name__)


class Signature(object):
    """
    CLSAG signature: initial challenge c_0, one response per ring member,
    one key image per layer. Carries no reference to the ring.
    """

    __slots__ = ("_c", "_responses", "_key_images")

    def __init__(self, c, responses, key_images):
        self._c = c
        self._responses = tuple(responses)
        self._key_images = tuple(bytes(x) for x in key_images)

    @property
    def c(self):
        return self._c

    initial_challenge = c

    @property
    def responses(self):
        return self._responses

    @property
    def key_images(self):
        return self._key_images

    def ring_size(self):
        return len(self._responses)

    def layers(self):
        return len(self._key_images)

    def __eq__(self, other):
        if not isinstance(other, Signature):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self):
        return hash(self.to_bytes())

    def __repr__(self):
        return "Signature(c=%s, n=%d, k=%d)" % (
            binascii.hexlify(crypto.encodeint(self._c)).decode(),
            self.ring_size(),
            self.layers(),
        )

    def to_bytes(self):
        """
        c || s_0 .. s_{n-1} || I_0 .. I_{k-1}, 32B each
        :return:
        """
        buff = [crypto.encodeint(self._c)]
        buff += [crypto.encodeint(x) for x in self._responses]
        buff += list(self._key_images)
        return b"".join(buff)

    @classmethod
    def from_bytes(cls, buf, ring_size, layers):
        """
        Parses the fixed layout, dimensions come from the ring
        :param buf:
        :param ring_size:
        :param layers:
        :return:
        """
        buf = bytes(buf)
        if len(buf) != 32 * (1 + ring_size + layers):
            raise InvalidEncoding(
                "Signature of %d bytes does not match ring %d x %d"
                % (len(buf), ring_size, layers)
            )

        c = crypto.decodeint(buf, 0, canonical=True)
        responses = [
            crypto.decodeint(buf, 32 * (1 + i), canonical=True) for i in range(ring_size)
        ]
        off = 32 * (1 + ring_size)
        key_images = [buf[off + 32 * j: off + 32 * (j + 1)] for j in range(layers)]
        return cls(c, responses, key_images)

    def dump(self):
        """
        Self describing encoding: uvarint(n) || uvarint(k) || to_bytes()
        :return:
        """
        return (
            xmrserialize.dump_uvarint_b(self.ring_size())
            + xmrserialize.dump_uvarint_b(self.layers())
            + self.to_bytes()
        )

    @classmethod
    def load(cls, buf):
        buf = bytes(buf)
        try:
            ring_size = load_uvarint_b(buf)
            off = uvarint_size(ring_size)
            layers = load_uvarint_b(buf[off:])
            off += uvarint_size(layers)
        except IndexError as e:
            raise InvalidEncoding("Truncated signature header") from e
        return cls.from_bytes(buf[off:], ring_size, layers)

    def verify(self, public_keys, message):
        """
        Raises VerificationError subclass when the signature does not hold
        :param public_keys: ring key sets, in the order used for signing
        :param message:
        :return:
        """
        return verify_clsag(message, self, public_keys)


def as_public_set(x):
    """
    Accepts PublicSet, Member, list of points or list of encodings
    :param x:
    :return:
    """
    if isinstance(x, PublicSet):
        return x
    if hasattr(x, "public_set"):
        return x.public_set
    x = list(x)
    if x and isinstance(x[0], (bytes, bytearray)):
        return PublicSet.from_bytes(x)
    return PublicSet(x)


def check_ring_shape(public_sets):
    """
    Ring has to be non-empty and rectangular
    :param public_sets:
    :return: (ring size, layers)
    """
    n = len(public_sets)
    if n == 0:
        raise EmptyRing("Ring has no members")

    k = len(public_sets[0])
    if k == 0:
        raise EmptyKeySet("Ring members have no keys")
    for ps in public_sets:
        if len(ps) != k:
            raise MismatchedKeyLength("Ring is not rectangular")
    return n, k


def verify_clsag(message, sig, public_keys):
    """
    Recomputes the challenge chain from c_0 over all n members.

    :param message:
    :param sig:
    :param public_keys: list of PublicSet (or anything as_public_set accepts)
    :return: True, raises on failure
    """
    public_sets = [as_public_set(x) for x in public_keys]
    n, k = check_ring_shape(public_sets)

    if sig.ring_size() != n:
        raise LengthMismatch("Expected %d responses, got %d" % (n, sig.ring_size()))
    if sig.layers() != k:
        raise LengthMismatch("Expected %d key images, got %d" % (k, sig.layers()))

    images = [crypto.decodepoint(x) for x in sig.key_images]
    for ki in images:
        if ki.is_identity():
            raise InvalidEncoding("Identity key image")

    logger.debug("Verifying CLSAG, ring: %d, layers: %d", n, k)
    mu = transcript.aggregation_coefficients(public_sets, sig.key_images, k)
    agg_keys = transcript.aggregate_keys(public_sets, mu)
    agg_image = transcript.aggregate_image(images, mu)
    prefix = transcript.round_hasher(message, agg_keys, agg_image)

    c = sig.c
    for i in range(n):
        HP = public_sets[i].hashed_pubkey()
        L = crypto.add_keys2(sig.responses[i], c, agg_keys[i])
        R = crypto.add_keys3(sig.responses[i], HP, c, agg_image)
        c = transcript.round_challenge(prefix, L, R)

    if not crypto.sc_eq(c, sig.c):
        raise ChallengeMismatch("Signature error")
    return True
