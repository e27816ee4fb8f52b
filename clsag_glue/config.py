#!/usr/bin/env python
# -*- coding: utf-8 -*-

import os


VERIFY_AFTER_SIGN = 0
MAX_RING_SIZE = 0


def _env_int(name):
    val = os.getenv(name)
    if val is None:
        return None
    return int(val)


def get_verify_after_sign():
    global VERIFY_AFTER_SIGN
    en = _env_int('CLSAG_VERIFY_AFTER_SIGN')
    if en is not None:
        return bool(en)

    return bool(VERIFY_AFTER_SIGN)


def set_verify_after_sign(x):
    global VERIFY_AFTER_SIGN
    if os.getenv('CLSAG_VERIFY_AFTER_SIGN') is not None:
        raise ValueError('Could not override Environment variable CLSAG_VERIFY_AFTER_SIGN')

    VERIFY_AFTER_SIGN = x


def get_max_ring_size():
    """
    Maximal number of ring members, 0 = unlimited
    """
    global MAX_RING_SIZE
    en = _env_int('CLSAG_MAX_RING_SIZE')
    if en is not None:
        return en

    return MAX_RING_SIZE


def set_max_ring_size(x):
    global MAX_RING_SIZE
    if os.getenv('CLSAG_MAX_RING_SIZE') is not None:
        raise ValueError('Could not override Environment variable CLSAG_MAX_RING_SIZE')
    if x < 0:
        raise ValueError('Ring size limit has to be non-negative')

    MAX_RING_SIZE = x
