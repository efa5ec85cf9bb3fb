from secrets import randbelow
from typing import Optional, Tuple

from Crypto.Util.number import bytes_to_long, long_to_bytes
from py_ecc import bn128

from errors import NotInvertible, RandomnessFailure

FQ = bn128.FQ

# Paramètres de la courbe alt_bn128 : y² = x³ + 3 (mod p)
p = bn128.field_modulus
ORDER = bn128.curve_order

SCALAR_SIZE = 32

# None représente le point à l'infini
Point = Optional[Tuple[int, int]]
INFINITY: Point = None


def _to_fq(P: Point):
    if P is None:
        return None
    return (FQ(P[0]), FQ(P[1]))


def _from_fq(P) -> Point:
    if P is None:
        return None
    return (int(P[0].n), int(P[1].n))


def generator() -> Point:
    return _from_fq(bn128.G1)


def order() -> int:
    return ORDER


def is_on_curve(P: Point) -> bool:
    """
    Vérifie si un point est sur la courbe
    y² = x³ + 3 (mod p)
    """
    if P is None:
        return True
    x, y = P
    # FQ réduit modulo p : les coordonnées hors plage sont refusées avant
    if not (0 <= x < p and 0 <= y < p):
        return False
    return bn128.is_on_curve(_to_fq(P), bn128.b)


# Arithmétique scalaire modulo ORDER

def reduce_mod(s: int) -> int:
    return s % ORDER


def scalar_add(a: int, b: int) -> int:
    return (a + b) % ORDER


def scalar_sub(a: int, b: int) -> int:
    return (a - b) % ORDER


def scalar_mul_mod(a: int, b: int) -> int:
    return (a * b) % ORDER


def invert(s: int) -> int:
    """
    Calcule l'inverse modulaire de s modulo l'ordre du groupe

    Raises:
        NotInvertible: Si s ≡ 0 (mod n)
    """
    s = s % ORDER
    if s == 0:
        raise NotInvertible("Le scalaire 0 n'est pas inversible")
    return pow(s, -1, ORDER)


def random_scalar() -> int:
    """
    Tire un scalaire uniforme dans [1, ORDER-1] depuis le CSPRNG du système

    Raises:
        RandomnessFailure: Si la source d'aléa est indisponible
    """
    try:
        return randbelow(ORDER - 1) + 1
    except (OSError, NotImplementedError) as e:
        raise RandomnessFailure(f"Source d'aléa indisponible : {e}") from e


# Opérations sur les points

def negate(P: Point) -> Point:
    return _from_fq(bn128.neg(_to_fq(P)))


def add(P: Point, Q: Point) -> Point:
    """Additionne deux points de la courbe (l'infini est l'élément neutre)"""
    return _from_fq(bn128.add(_to_fq(P), _to_fq(Q)))


def scalar_mul(P: Point, s: int) -> Point:
    """
    Calcule s·P

    Args:
        P: Le point de départ
        s: Le scalaire (réduit modulo ORDER)

    Returns:
        Point: s·P, ou l'infini si s ≡ 0 ou P est l'infini
    """
    s = s % ORDER
    if P is None or s == 0:
        return None
    return _from_fq(bn128.multiply(_to_fq(P), s))


def encode_point(P: Point) -> bytes:
    """Encode un point en 64 octets x || y (l'infini est encodé par des zéros)"""
    if P is None:
        return b'\x00' * (2 * SCALAR_SIZE)
    return long_to_bytes(P[0], SCALAR_SIZE) + long_to_bytes(P[1], SCALAR_SIZE)


def decode_point(data: bytes) -> Point:
    """
    Décode un point encodé par encode_point

    Raises:
        ValueError: Si la taille est incorrecte ou si le point n'est pas sur la courbe
    """
    if len(data) != 2 * SCALAR_SIZE:
        raise ValueError(f"Un point encodé fait {2 * SCALAR_SIZE} octets, reçu {len(data)}")
    x = bytes_to_long(data[:SCALAR_SIZE])
    y = bytes_to_long(data[SCALAR_SIZE:])
    if x == 0 and y == 0:
        return None
    P = (x, y)
    if not is_on_curve(P):
        raise ValueError("Le point n'est pas sur la courbe")
    return P


def encode_scalar(s: int) -> bytes:
    return long_to_bytes(s % ORDER, SCALAR_SIZE)


def decode_scalar(data: bytes) -> int:
    if len(data) != SCALAR_SIZE:
        raise ValueError(f"Un scalaire encodé fait {SCALAR_SIZE} octets, reçu {len(data)}")
    return bytes_to_long(data) % ORDER
