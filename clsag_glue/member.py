#!/usr/bin/env python
# -*- coding: utf-8 -*-

from clsag_glue.common import ClsagError, EmptyKeySet
from clsag_glue.keys import DEFAULT_POLICY, PrivateSet, PublicSet


class Member(object):
    """
    Ring entry. Decoys hold public keys only, the signer holds both sets.
    Use the new_decoy / new_signer constructors, they run the key policy.
    """

    def __init__(self, public_set, private_set=None):
        self.public_set = public_set
        self.private_set = private_set

    @classmethod
    def new_decoy(cls, public_set, policy=None):
        if not isinstance(public_set, PublicSet):
            public_set = PublicSet(public_set)
        return cls._checked(cls(public_set), policy)

    @classmethod
    def new_signer(cls, private_set, policy=None):
        if not isinstance(private_set, PrivateSet):
            private_set = PrivateSet(private_set)
        return cls._checked(cls(private_set.to_public_set(), private_set), policy)

    @classmethod
    def decoy_from_bytes(cls, encodings, policy=None):
        """
        Decoy from compressed public keys
        :param encodings: list of 32B point encodings, one per layer
        :param policy:
        :return:
        """
        return cls.new_decoy(PublicSet.from_bytes(encodings), policy)

    @classmethod
    def signer_from_bytes(cls, encodings, policy=None):
        """
        Signer from private scalars
        :param encodings: list of 32B reduced scalars, one per layer
        :param policy:
        :return:
        """
        return cls.new_signer(PrivateSet.from_bytes(encodings), policy)

    @classmethod
    def _checked(cls, member, policy):
        if member.public_set.is_empty():
            raise EmptyKeySet("Member has no keys")
        member.check_keys()

        policy = policy if policy is not None else DEFAULT_POLICY
        policy.check_member(member.public_set)
        return member

    def check_keys(self):
        """
        Signer private scalars have to be non-zero and derive the public set
        :return:
        """
        if self.private_set is None:
            return
        if len(self.private_set) != len(self.public_set):
            raise ClsagError("Private and public sets differ in size")
        if any(x.v == 0 for x in self.private_set.scalars):
            raise ClsagError("Zero private key")
        if self.private_set.to_public_set() != self.public_set:
            raise ClsagError("Public keys do not match the private keys")

    def __len__(self):
        return len(self.public_set)

    def __repr__(self):
        return "Member(%r)" % (self.public_set,)

    def is_signer(self):
        return self.private_set is not None

    def hashed_pubkey(self):
        return self.public_set.hashed_pubkey()

    def key_images(self):
        """
        Compressed key images of a signer, one per layer
        :return:
        """
        if self.private_set is None:
            raise ClsagError("Decoy has no key images")
        return self.private_set.compute_key_images(self.hashed_pubkey())
