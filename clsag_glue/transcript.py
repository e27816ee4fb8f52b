#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Fiat-Shamir transcripts of the CLSAG ring. Byte layout is pinned, signer and
# verifier have to feed exactly the same bytes:
#
#   mu_j  = H_s(AGG tag || u32le(j) || P_{0,j} .. P_{n-1,j} || I_0 .. I_{k-1})
#   c_i+1 = H_s(ROUND tag || uvarint(|m|) || m || P_0 .. P_{n-1} || I || L_i || R_i)
#
# H_s is SHA-512 reduced modulo the group order, P_i / I are the aggregated
# member keys and the aggregated key image.

import struct

from clsag_glue import crypto
from monero_serialize import xmrserialize

_HASH_KEY_CLSAG_ROUND = b"CLSAG_round\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00"
_HASH_KEY_CLSAG_AGG = b"CLSAG_agg\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00"


def aggregation_coefficients(public_sets, key_images, layers):
    """
    Per-layer aggregation weights mu_j
    :param public_sets: ring key sets, ring order
    :param key_images: compressed key images, layer order
    :param layers:
    :return:
    """
    encoded = [x.to_keys() for x in public_sets]
    mu = []
    for j in range(layers):
        hasher = crypto.get_hasher(_HASH_KEY_CLSAG_AGG)
        hasher.update(struct.pack("<I", j))
        for keys in encoded:
            hasher.update(keys[j])
        for ki in key_images:
            hasher.update(ki)
        mu.append(crypto.scalar_from_digest(hasher.digest()))
    return mu


def aggregate_keys(public_sets, mu):
    """
    P_i = sum_j mu_j * P_{i,j} for every member
    :param public_sets:
    :param mu:
    :return:
    """
    return [crypto.multiexp(mu, x.keys) for x in public_sets]


def aggregate_image(key_images, mu):
    """
    I = sum_j mu_j * I_j
    :param key_images: decoded key images
    :param mu:
    :return:
    """
    return crypto.multiexp(mu, key_images)


def round_hasher(message, agg_keys, agg_image):
    """
    Hasher with the part of the round transcript shared by all ring positions
    :param message:
    :param agg_keys:
    :param agg_image:
    :return:
    """
    hasher = crypto.get_hasher(_HASH_KEY_CLSAG_ROUND)
    hasher.update(xmrserialize.dump_uvarint_b(len(message)))
    hasher.update(message)
    for P in agg_keys:
        hasher.update(crypto.encodepoint(P))
    hasher.update(crypto.encodepoint(agg_image))
    return hasher


def round_challenge(prefix, L, R):
    """
    Next challenge of the chain from the shared prefix and the round commitments
    :param prefix:
    :param L:
    :param R:
    :return:
    """
    chasher = prefix.copy()
    chasher.update(crypto.encodepoint(L))
    chasher.update(crypto.encodepoint(R))
    return crypto.scalar_from_digest(chasher.digest())
