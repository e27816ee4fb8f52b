#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Ristretto255 prime order group built on the ed25519 curve, Python long ints.
# Not constant time! Reference backend only.
#
# Resources:
# https://ristretto.group
# https://www.rfc-editor.org/rfc/rfc9496
# https://www.rfc-editor.org/rfc/rfc8032#section-5.1

import binascii
import logging

from Crypto.Hash import SHA512
from clsag_glue.common import CryptoBackendError, HashWrapper, InvalidEncoding, random_bytes

logger = logging.getLogger(__name__)

# Field prime, group order, curve constant
q = 2 ** 255 - 19
l = 2 ** 252 + 27742317777372353535851937790883648493
d = -121665 * pow(121666, q - 2, q) % q

POINT_BYTES = 32
SCALAR_BYTES = 32
HASH_BYTES = 64

NULL_KEY_ENC = b"\x00" * 32

# ed25519 basepoint, its coset is the Ristretto255 generator
Bx = 15112221349535400772501151409588531511454012693041857206046113283949847762202
By = 46316835694926478169428394003475163141307993866256225615783033603165251855960

# Extended coordinates (X, Y, Z, T), x = X/Z, y = Y/Z, xy = T/Z
B_ext = (Bx % q, By % q, 1, (Bx * By) % q)
I_ext = (0, 1, 1, 0)


#
# Zmod(2^255 - 19) operations, fe (field element)
#


def fe_mod(a):
    return a % q


def fe_inv(z):
    return pow(z, q - 2, q)


def fe_isnegative(x):
    return (x % q) & 1


def fe_abs(x):
    x = x % q
    return q - x if x & 1 else x


def fe_sqrt_ratio_m1(u, v):
    """
    Returns (was_square, r) with r = +sqrt(u/v) when u/v is square,
    r = +sqrt(i*u/v) otherwise.
    :param u:
    :param v:
    :return:
    """
    u %= q
    v %= q
    v3 = v * v * v % q
    v7 = v3 * v3 * v % q
    r = (u * v3) * pow(u * v7, (q - 5) // 8, q) % q
    check = v * r * r % q

    correct_sign_sqrt = check == u
    flipped_sign_sqrt = check == (-u) % q
    flipped_sign_sqrt_i = check == (-u * fe_sqrtm1) % q

    if flipped_sign_sqrt or flipped_sign_sqrt_i:
        r = r * fe_sqrtm1 % q
    return correct_sign_sqrt or flipped_sign_sqrt, fe_abs(r)


fe_sqrtm1 = pow(2, (q - 1) // 4, q)  # sqrt(-1)
fe_invsqrt_a_minus_d = fe_sqrt_ratio_m1(1, -1 - d)[1]  # 1/sqrt(a - d), a = -1
fe_sqrt_ad_minus_one = q - fe_sqrt_ratio_m1(-d - 1, 1)[1]  # sqrt(a*d - 1), odd root
fe_one_minus_d_sq = (1 - d * d) % q
fe_d_minus_one_sq = (d - 1) * (d - 1) % q


#
# Edwards group law, a = -1, complete addition formulas
#


def ext_add(P, Q):
    """
    add-2008-hwcd-3
    :param P:
    :param Q:
    :return:
    """
    x1, y1, z1, t1 = P
    x2, y2, z2, t2 = Q
    A = (y1 - x1) * (y2 - x2) % q
    B = (y1 + x1) * (y2 + x2) % q
    C = t1 * 2 * d * t2 % q
    D = z1 * 2 * z2 % q
    E, F, G, H = B - A, D - C, D + C, B + A
    return E * F % q, G * H % q, F * G % q, E * H % q


def ext_neg(P):
    return (-P[0]) % q, P[1], P[2], (-P[3]) % q


def ext_scalarmult(P, e):
    """
    Double and add, e is a non-negative integer
    :param P:
    :param e:
    :return:
    """
    R = I_ext
    while e > 0:
        if e & 1:
            R = ext_add(R, P)
        P = ext_add(P, P)
        e >>= 1
    return R


def ext_eq(P, Q):
    """
    Ristretto equality, ignores the 4-torsion component
    """
    x1, y1 = P[0], P[1]
    x2, y2 = Q[0], Q[1]
    return (x1 * y2 - y1 * x2) % q == 0 or (y1 * y2 - x1 * x2) % q == 0


#
# Ristretto255 encoding, RFC 9496 section 4.3
#


def ristretto_decode(buf):
    """
    Decodes canonical encoding to extended coordinates
    :param buf:
    :return:
    """
    buf = bytes(buf)
    if len(buf) != POINT_BYTES:
        raise InvalidEncoding("Point has to be %d bytes long" % POINT_BYTES)

    s = int.from_bytes(buf, "little")
    if s >= q or fe_isnegative(s):
        raise InvalidEncoding("Non-canonical point encoding")

    ss = s * s % q
    u1 = (1 - ss) % q
    u2 = (1 + ss) % q
    u2_sqr = u2 * u2 % q
    v = (-(d * u1 * u1) - u2_sqr) % q

    was_square, invsqrt = fe_sqrt_ratio_m1(1, v * u2_sqr)
    den_x = invsqrt * u2 % q
    den_y = invsqrt * den_x * v % q

    x = fe_abs(2 * s * den_x)
    y = u1 * den_y % q
    t = x * y % q
    if not was_square or fe_isnegative(t) or y == 0:
        raise InvalidEncoding("Invalid Ristretto255 point encoding")
    return x, y, 1, t


def ristretto_encode(P):
    """
    Canonical 32B encoding of the extended point
    :param P:
    :return:
    """
    x0, y0, z0, t0 = P
    u1 = (z0 + y0) * (z0 - y0) % q
    u2 = x0 * y0 % q
    _, invsqrt = fe_sqrt_ratio_m1(1, u1 * u2 * u2)
    den1 = invsqrt * u1 % q
    den2 = invsqrt * u2 % q
    z_inv = den1 * den2 * t0 % q

    if fe_isnegative(t0 * z_inv):
        x = y0 * fe_sqrtm1 % q
        y = x0 * fe_sqrtm1 % q
        den_inv = den1 * fe_invsqrt_a_minus_d % q
    else:
        x, y, den_inv = x0, y0, den2

    if fe_isnegative(x * z_inv):
        y = -y % q

    s = fe_abs(den_inv * (z0 - y))
    return s.to_bytes(POINT_BYTES, "little")


def ristretto_map(r0):
    """
    Elligator 2 one-way map of a field element to the group
    :param r0:
    :return:
    """
    r = fe_sqrtm1 * r0 * r0 % q
    u = (r + 1) * fe_one_minus_d_sq % q
    v = (-1 - r * d) * (r + d) % q

    was_square, s = fe_sqrt_ratio_m1(u, v)
    s_prime = (-fe_abs(s * r0)) % q
    if not was_square:
        s = s_prime
        c = r
    else:
        c = q - 1

    n = (c * (r - 1) * fe_d_minus_one_sq - v) % q
    w0 = 2 * s * v % q
    w1 = n * fe_sqrt_ad_minus_one % q
    w2 = (1 - s * s) % q
    w3 = (1 + s * s) % q
    return w0 * w3 % q, w2 * w1 % q, w1 * w3 % q, w0 * w2 % q


def ristretto_from_uniform(buf):
    """
    Maps 64 uniformly random bytes to the group
    :param buf:
    :return:
    """
    if len(buf) != HASH_BYTES:
        raise CryptoBackendError("Uniform input has to be %d bytes long" % HASH_BYTES)
    mask = (1 << 255) - 1
    r0 = (int.from_bytes(buf[:32], "little") & mask) % q
    r1 = (int.from_bytes(buf[32:], "little") & mask) % q
    return ext_add(ristretto_map(r0), ristretto_map(r1))


#
# Group element and scalar types
#


class RstScalar(object):
    """
    Scalar modulo the group order
    """

    __slots__ = ("v",)

    def __init__(self, v=None, offset=0):
        self.v = 0
        self.init(v, offset)

    def init(self, src=None, offset=0):
        if src is None:
            self.v = 0
        elif isinstance(src, int):
            self.v = src % l
        elif isinstance(src, RstScalar):
            self.v = src.v
        else:
            self.v = int.from_bytes(bytes(src[offset:offset + SCALAR_BYTES]), "little") % l
        return self

    def _assert_scalar(self, other):
        if not isinstance(other, RstScalar):
            raise ValueError("operand is not RstScalar")

    def __repr__(self):
        return "RstScalar(%s)" % binascii.hexlify(bytes(self)).decode()

    def __eq__(self, other):
        self._assert_scalar(other)
        return self.v == other.v

    def __hash__(self):
        return hash(self.v)

    def __bytes__(self):
        return self.v.to_bytes(SCALAR_BYTES, "little")

    def modinv(self):
        if self.v == 0:
            raise CryptoBackendError("Zero scalar has no inverse")
        self.v = pow(self.v, l - 2, l)
        return self

    def __neg__(self):
        return RstScalar(-1 * self.v)

    def __add__(self, other):
        self._assert_scalar(other)
        return RstScalar(self.v + other.v)

    def __sub__(self, other):
        self._assert_scalar(other)
        return RstScalar(self.v - other.v)

    def __mul__(self, other):
        self._assert_scalar(other)
        return RstScalar(self.v * other.v)

    @classmethod
    def ensure_scalar(cls, x):
        if isinstance(x, RstScalar):
            return x
        return RstScalar(x)


class RstPoint(object):
    """
    Ristretto255 group element, extended coordinates of a representative.
    The compressed encoding is canonical: equal elements encode equally.
    """

    __slots__ = ("v", "_enc")

    def __init__(self, v=None, offset=0):
        self.v = I_ext
        self._enc = None
        self.init(v, offset)

    def init(self, src=None, offset=0):
        self._enc = None
        if src is None:
            self.v = I_ext
        elif isinstance(src, RstPoint):
            self.v = src.v
            self._enc = src._enc
        elif isinstance(src, tuple):
            self.v = src
        else:
            enc = bytes(src[offset:offset + POINT_BYTES])
            self.v = ristretto_decode(enc)
            self._enc = enc
        return self

    def __repr__(self):
        return "RstPoint(%s)" % binascii.hexlify(bytes(self)).decode()

    def __eq__(self, other):
        if not isinstance(other, RstPoint):
            raise ValueError("Operand is not RstPoint")
        return ext_eq(self.v, other.v)

    def __hash__(self):
        return hash(bytes(self))

    def __bytes__(self):
        if self._enc is None:
            self._enc = ristretto_encode(self.v)
        return self._enc

    def is_identity(self):
        return ext_eq(self.v, I_ext)

    def _assert_point(self, other):
        if not isinstance(other, RstPoint):
            raise ValueError("operand is not RstPoint")

    def __add__(self, other):
        self._assert_point(other)
        return RstPoint(ext_add(self.v, other.v))

    def __neg__(self):
        return RstPoint(ext_neg(self.v))

    def __sub__(self, other):
        self._assert_point(other)
        return RstPoint(ext_add(self.v, ext_neg(other.v)))

    def __mul__(self, other):
        return scalarmult(self, other)


#
# Hashing
#


def get_hasher(*args):
    """
    Incremental SHA-512 used for transcripts
    :return:
    """
    h = HashWrapper(SHA512.new())
    if len(args) == 1:
        h.update(args[0])
    return h


def fast_hash(buff):
    """
    SHA-512 in one call
    :param buff:
    :return:
    """
    return SHA512.new(bytes(buff)).digest()


def scalar_from_digest(digest):
    """
    Wide reduction of the 64B digest
    :param digest:
    :return:
    """
    return RstScalar(int.from_bytes(digest, "little"))


def hash_to_scalar(data, length=None):
    """
    H_s(data)
    :param data:
    :param length:
    :return:
    """
    return scalar_from_digest(fast_hash(data[:length] if length else data))


def hash_to_point(buf):
    """
    H_p(buf) = from_uniform_bytes(SHA-512(buf))
    Elligator based, the discrete log of the result to the basepoint is unknown.

    :param buf:
    :return:
    """
    return RstPoint(ristretto_from_uniform(fast_hash(buf)))


#
# Encoding
#


def decodeint(x, offset=0, canonical=False):
    """
    Decodes scalar from its 32B little endian encoding.
    With canonical set, unreduced encodings are rejected.
    """
    buf = bytes(x[offset:offset + SCALAR_BYTES])
    if len(buf) != SCALAR_BYTES:
        raise InvalidEncoding("Scalar has to be %d bytes long" % SCALAR_BYTES)
    v = int.from_bytes(buf, "little")
    if canonical and v >= l:
        raise InvalidEncoding("Scalar encoding is not reduced")
    return RstScalar(v)


def encodeint(x):
    return bytes(x)


def decodepoint(b, offset=0):
    return RstPoint(b, offset)


def encodepoint(P):
    return bytes(P)


def point_eq(P, Q):
    return P == Q


def identity(byte_enc=False):
    """
    Identity point
    :return:
    """
    idd = RstPoint()
    return idd if not byte_enc else bytes(idd)


#
# Zmod(order), scalar values field
#


def sc_0():
    return RstScalar(0)


def sc_init(x):
    if x >= (1 << 64):
        raise ValueError("Initialization works up to 64-bit only")
    return RstScalar(x)


def sc_add(aa, bb):
    return aa + bb


def sc_sub(aa, bb):
    return aa - bb


def sc_mul(a, b):
    return a * b


def sc_mulsub(aa, bb, cc):
    """
    (cc - aa * bb) % l
    """
    return cc - aa * bb


def sc_muladd(aa, bb, cc):
    """
    (cc + aa * bb) % l
    """
    return cc + aa * bb


def sc_inv(aa):
    return RstScalar(aa).modinv()


def sc_eq(a, b):
    return a == b


def sc_isnonzero(c):
    return c.v != 0


#
# Group
#


_BASE_POW = []


def _base_powers():
    """
    2^i * B for every bit of the scalar
    """
    if not _BASE_POW:
        P = B_ext
        table = []
        for _ in range(253):
            table.append(P)
            P = ext_add(P, P)
        _BASE_POW.extend(table)
    return _BASE_POW


def scalarmult_base(a):
    """
    a * B
    :param a:
    :return:
    """
    e = RstScalar.ensure_scalar(a).v
    table = _base_powers()
    R = I_ext
    i = 0
    while e > 0:
        if e & 1:
            R = ext_add(R, table[i])
        e >>= 1
        i += 1
    return RstPoint(R)


def scalarmult(P, e):
    """
    e * P
    :param P:
    :param e:
    :return:
    """
    e = RstScalar.ensure_scalar(e)
    return RstPoint(ext_scalarmult(P.v, e.v))


def point_add(A, B):
    return A + B


def point_sub(A, B):
    return A - B


def point_double(P):
    return P + P


BASE = RstPoint(B_ext)
ZERO = RstScalar(0)
ONE = RstScalar(1)
TWO = RstScalar(2)


#
# Randomness
#


class SystemRandomSource(object):
    """
    Cryptographically secure scalars, production default
    """

    def random_bytes(self, num):
        return random_bytes(num)

    def random_scalar(self):
        return RstScalar(int.from_bytes(self.random_bytes(64), "little"))


class PRNG(object):
    """
    Deterministic SHA-512 counter mode generator.
    Reproducible test vectors only, never use for real signatures.
    """

    def __init__(self, seed=b""):
        self.seed = bytes(seed)
        self.ctr = 0
        self.leftover = b""

    def reset(self, seed=None):
        if seed is not None:
            self.seed = bytes(seed)
        self.ctr = 0
        self.leftover = b""

    def _gen(self):
        self.ctr += 1
        return fast_hash(self.seed + self.ctr.to_bytes(32, "big"))

    def random_bytes(self, num):
        buff = bytearray()
        while len(buff) < num:
            if not self.leftover:
                self.leftover = self._gen()
            tocopy = min(len(self.leftover), num - len(buff))
            buff += self.leftover[:tocopy]
            self.leftover = self.leftover[tocopy:]
        return bytes(buff)

    def random_scalar(self):
        return RstScalar(int.from_bytes(self.random_bytes(64), "little"))


_SYSTEM_RANDOM = SystemRandomSource()


def random_scalar(rng=None):
    rng = rng if rng is not None else _SYSTEM_RANDOM
    return rng.random_scalar()


def prng(seed=b""):
    return PRNG(seed)
