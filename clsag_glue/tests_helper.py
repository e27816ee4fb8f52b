#!/usr/bin/env python
# -*- coding: utf-8 -*-

from clsag_glue import crypto
from clsag_glue.keys import PrivateSet, PublicSet
from clsag_glue.member import Member


def generate_private_set(num_keys, rng=None):
    return PrivateSet([crypto.random_scalar(rng) for _ in range(num_keys)])


def generate_public_set(num_keys, rng=None):
    return generate_private_set(num_keys, rng).to_public_set()


def generate_decoys(num_decoys, num_keys, rng=None):
    """
    Decoy members with fresh random keys
    :param num_decoys:
    :param num_keys:
    :param rng:
    :return:
    """
    return [
        Member.new_decoy(generate_public_set(num_keys, rng)) for _ in range(num_decoys)
    ]


def generate_signer(num_keys, rng=None):
    return Member.new_signer(generate_private_set(num_keys, rng))


def build_ring(clsag, num_decoys, num_keys, signer_pos=None, rng=None):
    """
    Fills the ring with decoys and one signer at signer_pos (last by default).
    Returns the signer member.

    :param clsag:
    :param num_decoys:
    :param num_keys:
    :param signer_pos:
    :param rng:
    :return:
    """
    signer_pos = num_decoys if signer_pos is None else signer_pos
    decoys = generate_decoys(num_decoys, num_keys, rng)
    signer = generate_signer(num_keys, rng)
    members = decoys[:signer_pos] + [signer] + decoys[signer_pos:]
    for member in members:
        clsag.add_member(member)
    return signer
