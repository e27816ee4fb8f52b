#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Key sets of one ring member. A set is not a tuple: placing the same key
# twice into it amounts to proving ownership of the same key twice, which the
# maths allows but the protocol forbids. The rule is enforced by KeyPolicy at
# member creation and ring assembly, the arithmetic below does not care.

import logging

from clsag_glue import crypto
from clsag_glue.common import DuplicateKey, EmptyKeySet

logger = logging.getLogger(__name__)


class PublicSet(object):
    """
    Ordered public keys of one member, one point per layer
    """

    def __init__(self, keys=None):
        self.keys = list(keys) if keys is not None else []

    @classmethod
    def from_bytes(cls, encodings):
        """
        Decodes list of compressed points, raises InvalidEncoding
        :param encodings:
        :return:
        """
        return cls([crypto.decodepoint(x) for x in encodings])

    def __len__(self):
        return len(self.keys)

    def __iter__(self):
        return iter(self.keys)

    def __getitem__(self, item):
        return self.keys[item]

    def __eq__(self, other):
        if not isinstance(other, PublicSet):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self):
        return hash(self.to_bytes())

    def __repr__(self):
        return "PublicSet(%s)" % ", ".join(x.hex()[:16] for x in self.to_keys())

    def is_empty(self):
        return len(self.keys) == 0

    def duplicates_exist(self):
        """
        True if two layers carry the same key, compared on canonical encodings
        :return:
        """
        encoded = self.to_keys()
        return len(encoded) != len(set(encoded))

    def hashed_pubkey(self):
        """
        H_p of the compressed first key.
        Generator of the key images of every layer of this member.
        :return:
        """
        if self.is_empty():
            raise EmptyKeySet("Empty public set has no hashed key")
        return crypto.hash_key_to_point(self.keys[0])

    def to_keys(self):
        return [crypto.encodepoint(x) for x in self.keys]

    def to_bytes(self):
        return b"".join(self.to_keys())


class PrivateSet(object):
    """
    Ordered private scalars of the signer, index aligned with its PublicSet
    """

    def __init__(self, scalars=None):
        self.scalars = list(scalars) if scalars is not None else []

    @classmethod
    def from_bytes(cls, encodings):
        """
        Decodes list of 32B scalars, unreduced encodings are rejected
        :param encodings:
        :return:
        """
        return cls([crypto.decodeint(x, canonical=True) for x in encodings])

    def __len__(self):
        return len(self.scalars)

    def __repr__(self):
        return "PrivateSet(<%d keys>)" % len(self.scalars)

    def is_empty(self):
        return len(self.scalars) == 0

    def to_public_set(self):
        return PublicSet([crypto.scalarmult_base(x) for x in self.scalars])

    def compute_key_images(self, generator):
        """
        I_j = x_j * generator, compressed.
        The generator is the hashed first public key of the owning member.

        :param generator:
        :return:
        """
        return [
            crypto.encodepoint(crypto.scalarmult(generator, x)) for x in self.scalars
        ]


def ring_duplicates_exist(public_sets):
    """
    True if two members present the identical key set
    :param public_sets:
    :return:
    """
    encoded = [x.to_bytes() for x in public_sets]
    return len(encoded) != len(set(encoded))


class KeyPolicy(object):
    """
    Validation of key material at construction boundaries
    """

    def check_member(self, public_set):
        pass

    def check_ring(self, public_sets, candidate):
        pass


class DistinctKeyPolicy(KeyPolicy):
    """
    Rejects repeated keys within a member and repeated members within a ring
    """

    def check_member(self, public_set):
        if public_set.duplicates_exist():
            raise DuplicateKey("Member presents the same key twice")

    def check_ring(self, public_sets, candidate):
        if ring_duplicates_exist(list(public_sets) + [candidate]):
            raise DuplicateKey("Ring already contains the same key set")


DEFAULT_POLICY = DistinctKeyPolicy()
