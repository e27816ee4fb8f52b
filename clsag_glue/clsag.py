#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# CLSAG, concise linkable spontaneous anonymous group signatures
# https://eprint.iacr.org/2019/654.pdf
#
# Multi-layer variant: every member holds k keys, layers are aggregated with
# hash derived weights mu_j into a single key per member, one key image per
# layer is published.

import logging

from clsag_glue import config, crypto, transcript
from clsag_glue.common import (
    ClsagError,
    CryptoBackendError,
    EmptyKeySet,
    EmptyRing,
    MismatchedKeyLength,
    MultipleSigners,
    NoSigner,
    VerificationError,
    ct_eq_int,
    ct_select,
)
from clsag_glue.keys import DEFAULT_POLICY
from clsag_glue.member import Member
from clsag_glue.signature import Signature, verify_clsag

logger = logging.getLogger(__name__)


class Clsag(object):
    """
    Ring of members, decoys and exactly one signer, and the signing engine.
    The position of the signer is never exposed.

    :param rng: randomness source with random_scalar(), secure system source by default.
                Never share a seeded source between signatures.
    :param policy: key policy applied on ring assembly
    """

    def __init__(self, rng=None, policy=None):
        self._members = []
        self._signer_index = None
        self._rng = rng
        self._policy = policy if policy is not None else DEFAULT_POLICY

    def __len__(self):
        return len(self._members)

    def __repr__(self):
        return "Clsag(members=%d, layers=%d)" % (self.size(), self.layers())

    def size(self):
        return len(self._members)

    def layers(self):
        return len(self._members[0]) if self._members else 0

    def public_keys(self):
        """
        Key sets of all members in ring order
        :return:
        """
        return [m.public_set for m in self._members]

    def add_member(self, member):
        if member.public_set.is_empty():
            raise EmptyKeySet("Member has no keys")
        member.check_keys()

        limit = config.get_max_ring_size()
        if limit and len(self._members) >= limit:
            raise ClsagError("Ring size limit %d reached" % limit)

        if self._members and len(member) != self.layers():
            raise MismatchedKeyLength(
                "Member has %d keys, ring has %d" % (len(member), self.layers())
            )

        if member.is_signer() and self._signer_index is not None:
            raise MultipleSigners("Ring already has a signer")

        self._policy.check_member(member.public_set)
        self._policy.check_ring(self.public_keys(), member.public_set)

        if member.is_signer():
            self._signer_index = len(self._members)
        self._members.append(member)
        return self

    def add_decoy(self, public_keys):
        """
        Adds decoy from compressed public keys
        :param public_keys: list of 32B encodings, one per layer
        :return:
        """
        return self.add_member(Member.decoy_from_bytes(public_keys, self._policy))

    def add_signer(self, private_keys):
        """
        Adds the signer from its private scalars
        :param private_keys: list of 32B scalars, one per layer
        :return:
        """
        return self.add_member(Member.signer_from_bytes(private_keys, self._policy))

    def sign(self, message):
        """
        Signs the message with the ring.

        :param message: bytes
        :return: Signature
        """
        n = len(self._members)
        if n == 0:
            raise EmptyRing("Ring has no members")
        if self._signer_index is None:
            raise NoSigner("Ring has no signer")

        sig = generate_clsag(
            message, self.public_keys(), self._members[self._signer_index].private_set,
            self._signer_index, self._rng
        )

        if config.get_verify_after_sign():
            try:
                verify_clsag(message, sig, self.public_keys())
            except VerificationError as e:
                raise CryptoBackendError("Fresh signature does not verify") from e
        return sig


def generate_clsag(message, public_sets, private_set, index, rng=None):
    """
    Builds the challenge chain and closes it at the signer position.

    The walk is one pass of n uniform steps starting at the signer. At the
    signer step the operands are (alpha, c = 0), i.e. L = alpha*G and
    R = alpha*H_p(P_l), the remaining steps use a fresh response and the
    running challenge. Operands are selected arithmetically, not by branching
    on the secret index.

    :param message:
    :param public_sets: ring key sets, ring order
    :param private_set: signer private scalars
    :param index: signer position
    :param rng:
    :return: Signature
    """
    n = len(public_sets)
    k = len(private_set)
    logger.debug("Signing CLSAG, ring: %d, layers: %d", n, k)

    HP = [ps.hashed_pubkey() for ps in public_sets]
    key_images = private_set.compute_key_images(HP[index])

    mu = transcript.aggregation_coefficients(public_sets, key_images, k)
    agg_keys = transcript.aggregate_keys(public_sets, mu)
    agg_image = transcript.aggregate_image(
        [crypto.decodepoint(x) for x in key_images], mu
    )
    x = crypto.sc_inner(mu, private_set.scalars)
    prefix = transcript.round_hasher(message, agg_keys, agg_image)

    alpha = crypto.random_scalar(rng)
    responses = [None] * n
    c = crypto.sc_0()
    c0 = crypto.sc_0()

    for t in range(n):
        i = (index + t) % n
        at_signer = ct_eq_int(i, index)
        s_i = crypto.random_scalar(rng)
        s = crypto.RstScalar(ct_select(at_signer, alpha.v, s_i.v))
        c_in = crypto.RstScalar(ct_select(at_signer, 0, c.v))

        L = crypto.add_keys2(s, c_in, agg_keys[i])
        R = crypto.add_keys3(s, HP[i], c_in, agg_image)
        c = transcript.round_challenge(prefix, L, R)

        responses[i] = s_i
        wraps = ct_eq_int((i + 1) % n, 0)
        c0 = crypto.RstScalar(ct_select(wraps, c.v, c0.v))

    # c is c_l now, s_l = alpha - c_l * x
    responses[index] = crypto.sc_mulsub(c, x, alpha)
    return Signature(c0, responses, key_images)
