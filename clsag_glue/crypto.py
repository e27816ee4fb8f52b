#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Resources:
# https://eprint.iacr.org/2019/654.pdf
# https://ristretto.group

from clsag_glue.core.ec import *


def add_keys2(a, b, B):
    """
    aG + bB, G is basepoint
    :param a:
    :param b:
    :param B:
    :return:
    """
    return point_add(scalarmult_base(a), scalarmult(B, b))


def add_keys3(a, A, b, B):
    """
    aA + bB
    :param a:
    :param A:
    :param b:
    :param B:
    :return:
    """
    return point_add(scalarmult(A, a), scalarmult(B, b))


def hash_key_to_point(P):
    """
    H_p(P) over the compressed encoding of P
    :param P: point or its encoding
    :return:
    """
    return hash_to_point(P if isinstance(P, (bytes, bytearray)) else encodepoint(P))


def multiexp(scalars, points):
    """
    sum_i scalars[i] * points[i]
    :param scalars:
    :param points:
    :return:
    """
    if len(scalars) != len(points):
        raise ValueError("Scalar and point vectors differ in size")
    acc = identity()
    for s, P in zip(scalars, points):
        acc = point_add(acc, scalarmult(P, s))
    return acc


def sc_inner(a, b):
    """
    sum_i a[i] * b[i] over scalars
    :param a:
    :param b:
    :return:
    """
    if len(a) != len(b):
        raise ValueError("Scalar vectors differ in size")
    acc = sc_0()
    for x, y in zip(a, b):
        acc = sc_muladd(x, y, acc)
    return acc
