#!/usr/bin/env python
# -*- coding: utf-8 -*-

import os
import unittest
from unittest import mock

import aiounittest
from clsag_glue import config


class ConfigTest(aiounittest.AsyncTestCase):
    """Module settings and their environment overrides"""

    def __init__(self, *args, **kwargs):
        super(ConfigTest, self).__init__(*args, **kwargs)

    def setUp(self):
        self._saved = (config.VERIFY_AFTER_SIGN, config.MAX_RING_SIZE)

    def tearDown(self):
        config.VERIFY_AFTER_SIGN, config.MAX_RING_SIZE = self._saved

    @mock.patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        self.assertFalse(config.get_verify_after_sign())
        self.assertEqual(config.get_max_ring_size(), 0)

    @mock.patch.dict(os.environ, {}, clear=True)
    def test_setters(self):
        config.set_verify_after_sign(1)
        self.assertTrue(config.get_verify_after_sign())
        config.set_max_ring_size(16)
        self.assertEqual(config.get_max_ring_size(), 16)

        with self.assertRaises(ValueError):
            config.set_max_ring_size(-1)

    @mock.patch.dict(
        os.environ, {"CLSAG_VERIFY_AFTER_SIGN": "1", "CLSAG_MAX_RING_SIZE": "11"}
    )
    def test_env_override(self):
        self.assertTrue(config.get_verify_after_sign())
        self.assertEqual(config.get_max_ring_size(), 11)

        with self.assertRaises(ValueError):
            config.set_verify_after_sign(0)
        with self.assertRaises(ValueError):
            config.set_max_ring_size(4)

    @mock.patch.dict(os.environ, {"CLSAG_VERIFY_AFTER_SIGN": "0"})
    def test_env_disables(self):
        config.VERIFY_AFTER_SIGN = 1
        self.assertFalse(config.get_verify_after_sign())


if __name__ == "__main__":
    unittest.main()  # pragma: no cover
