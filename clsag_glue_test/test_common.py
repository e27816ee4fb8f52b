#!/usr/bin/env python
# -*- coding: utf-8 -*-

import unittest

import aiounittest
from clsag_glue import common, crypto


class CommonTest(aiounittest.AsyncTestCase):
    """Simple tests"""

    def __init__(self, *args, **kwargs):
        super(CommonTest, self).__init__(*args, **kwargs)

    def test_hasher(self):
        h = crypto.get_hasher(b"prefix")
        h2 = h.copy()
        h.update(b"abc")
        h2.update(bytearray(b"abc"))
        h2.update(b"")
        self.assertEqual(h.digest(), h2.digest())
        self.assertEqual(h.digest(), crypto.fast_hash(b"prefixabc"))
        self.assertEqual(len(h.digest()), 64)
        self.assertEqual(h.hexdigest(), h.digest().hex())

    def test_errors(self):
        self.assertTrue(issubclass(common.ChallengeMismatch, common.VerificationError))
        self.assertTrue(issubclass(common.InvalidEncoding, common.VerificationError))
        self.assertTrue(issubclass(common.VerificationError, common.ClsagError))
        self.assertTrue(issubclass(common.DuplicateKey, common.ClsagError))

        e = common.KeyImageReused(b"\x01" * 32)
        self.assertEqual(e.key_image, b"\x01" * 32)
        self.assertIn("0101", str(e))

    def test_random_bytes(self):
        self.assertEqual(len(common.random_bytes(17)), 17)
        self.assertEqual(len(crypto.SystemRandomSource().random_bytes(5)), 5)


if __name__ == "__main__":
    unittest.main()  # pragma: no cover
