#!/usr/bin/env python
# -*- coding: utf-8 -*-

import unittest

import aiounittest
from clsag_glue import common, crypto, tests_helper
from clsag_glue.keys import (
    DistinctKeyPolicy,
    KeyPolicy,
    PrivateSet,
    PublicSet,
    ring_duplicates_exist,
)
from clsag_glue.member import Member


class KeysTest(aiounittest.AsyncTestCase):
    """Key sets and ring members"""

    def __init__(self, *args, **kwargs):
        super(KeysTest, self).__init__(*args, **kwargs)

    def test_public_set_derivation(self):
        priv = tests_helper.generate_private_set(3)
        pub = priv.to_public_set()
        self.assertEqual(len(pub), 3)
        for x, P in zip(priv.scalars, pub):
            self.assertTrue(crypto.point_eq(P, crypto.scalarmult_base(x)))

        self.assertEqual(pub, PublicSet.from_bytes(pub.to_keys()))
        self.assertEqual(len(pub.to_bytes()), 3 * 32)
        self.assertFalse(pub.duplicates_exist())

    def test_duplicates(self):
        pub = tests_helper.generate_public_set(4)
        pub.keys[0] = pub.keys[-1]
        self.assertTrue(pub.duplicates_exist())

        with self.assertRaises(common.DuplicateKey):
            DistinctKeyPolicy().check_member(pub)
        with self.assertRaises(common.DuplicateKey):
            Member.new_decoy(pub)

        # permissive policy lets it through
        member = Member.new_decoy(pub, KeyPolicy())
        self.assertEqual(len(member), 4)

    def test_ring_duplicates(self):
        a = tests_helper.generate_public_set(2)
        b = tests_helper.generate_public_set(2)
        self.assertFalse(ring_duplicates_exist([a, b]))
        self.assertTrue(ring_duplicates_exist([a, b, PublicSet(list(a.keys))]))

        with self.assertRaises(common.DuplicateKey):
            DistinctKeyPolicy().check_ring([a, b], PublicSet(list(b.keys)))

    def test_hashed_pubkey(self):
        pub = tests_helper.generate_public_set(2)
        self.assertTrue(
            crypto.point_eq(pub.hashed_pubkey(), crypto.hash_key_to_point(pub[0]))
        )
        with self.assertRaises(common.EmptyKeySet):
            PublicSet().hashed_pubkey()

    def test_key_images(self):
        signer = tests_helper.generate_signer(2)
        HP = signer.hashed_pubkey()
        images = signer.key_images()
        self.assertEqual(len(images), 2)
        for x, ki in zip(signer.private_set.scalars, images):
            self.assertEqual(ki, crypto.encodepoint(crypto.scalarmult(HP, x)))

        # every layer uses the generator of the first key
        self.assertEqual(
            images[1], crypto.encodepoint(crypto.scalarmult(
                crypto.hash_key_to_point(signer.public_set[0]), signer.private_set.scalars[1]))
        )

        decoy = tests_helper.generate_decoys(1, 2)[0]
        with self.assertRaises(common.ClsagError):
            decoy.key_images()

    def test_member_checks(self):
        with self.assertRaises(common.EmptyKeySet):
            Member.new_decoy([])
        with self.assertRaises(common.EmptyKeySet):
            Member.new_signer([])
        with self.assertRaises(common.ClsagError):
            Member.new_signer([crypto.sc_0()])

        signer = Member.new_signer([crypto.random_scalar(), crypto.random_scalar()])
        self.assertTrue(signer.is_signer())
        self.assertFalse(Member.new_decoy(signer.public_set).is_signer())

    def test_member_from_bytes(self):
        priv = tests_helper.generate_private_set(2)
        signer = Member.signer_from_bytes([crypto.encodeint(x) for x in priv.scalars])
        self.assertEqual(signer.public_set, priv.to_public_set())

        decoy = Member.decoy_from_bytes(signer.public_set.to_keys())
        self.assertEqual(decoy.public_set, signer.public_set)

        with self.assertRaises(common.InvalidEncoding):
            Member.decoy_from_bytes([b"\xff" * 32])
        with self.assertRaises(common.InvalidEncoding):
            Member.signer_from_bytes([crypto.l.to_bytes(32, "little")])

    def test_repr_hides_secrets(self):
        priv = tests_helper.generate_private_set(2)
        self.assertEqual(repr(priv), "PrivateSet(<2 keys>)")
        for x in priv.scalars:
            self.assertNotIn(crypto.encodeint(x).hex(), repr(Member.new_signer(priv)))

    def test_private_set_from_bytes(self):
        priv = tests_helper.generate_private_set(3)
        other = PrivateSet.from_bytes([crypto.encodeint(x) for x in priv.scalars])
        self.assertEqual(other.scalars, priv.scalars)
        self.assertEqual(other.to_public_set(), priv.to_public_set())


if __name__ == "__main__":
    unittest.main()  # pragma: no cover
