from secrets import randbits
from typing import Tuple

from Crypto.Hash import keccak
from Crypto.Util.number import long_to_bytes

from curve import reduce_mod
from errors import MalformedVote, RandomnessFailure
from models import VoteMessage

# Largeur de l'entier haché (uint256 côté registre)
VOTE_WIDTH = 256


def encode(choice: int, zero_bits: int, nonce_bits: int) -> Tuple[int, int]:
    """
    Encode un choix et un nonce aléatoire dans un entier

    vote = choice << (zero_bits + nonce_bits) | nonce

    Args:
        choice: Le numéro du candidat (à partir de 1)
        zero_bits: Nombre de bits de bourrage à zéro
        nonce_bits: Nombre de bits du nonce

    Returns:
        Tuple[int, int]: (vote, nonce)

    Raises:
        ValueError: Si les paramètres sont invalides
        RandomnessFailure: Si la source d'aléa est indisponible
    """
    if choice < 1:
        raise ValueError("Le choix doit être supérieur ou égal à 1")
    if zero_bits < 0 or nonce_bits < 0:
        raise ValueError("Les largeurs de champs doivent être positives")

    try:
        nonce = randbits(nonce_bits) if nonce_bits else 0
    except (OSError, NotImplementedError) as e:
        raise RandomnessFailure(f"Source d'aléa indisponible : {e}") from e

    vote = (choice << (zero_bits + nonce_bits)) | nonce
    if vote.bit_length() > VOTE_WIDTH:
        raise ValueError(f"Le vote dépasse {VOTE_WIDTH} bits")
    return vote, nonce


def hash_vote(vote: int) -> int:
    """
    Hache le vote avec keccak256 sur son encodage big-endian 32 octets,
    comme keccak256(abi.encodePacked(uint256)) côté registre

    Returns:
        int: Le hash réduit modulo l'ordre de la courbe
    """
    if vote < 0 or vote.bit_length() > VOTE_WIDTH:
        raise ValueError(f"Le vote doit tenir sur {VOTE_WIDTH} bits")
    h = keccak.new(digest_bits=256, data=long_to_bytes(vote, VOTE_WIDTH // 8))
    return reduce_mod(int(h.hexdigest(), 16))


def decode(vote: int, zero_bits: int, nonce_bits: int) -> Tuple[int, int]:
    """
    Décode un vote en (choix, nonce) et vérifie les bits de bourrage

    Raises:
        MalformedVote: Si les bits de bourrage ne sont pas nuls
    """
    nonce = vote & ((1 << nonce_bits) - 1)
    padding = (vote >> nonce_bits) & ((1 << zero_bits) - 1)
    if padding != 0:
        raise MalformedVote("Les bits de bourrage du vote ne sont pas nuls")
    choice = vote >> (zero_bits + nonce_bits)
    return choice, nonce


def new_vote(choice: int, zero_bits: int, nonce_bits: int) -> VoteMessage:
    vote, nonce = encode(choice, zero_bits, nonce_bits)
    return VoteMessage(choice, nonce, vote)
