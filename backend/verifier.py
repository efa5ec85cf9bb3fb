from curve import Point, ORDER, add, generator, is_on_curve, scalar_mul, scalar_mul_mod
from errors import InvalidSignature, MalformedVote
from models import Signature
from vote_encoder import decode, hash_vote


def verify(vote_hash: int, signature: Signature, public_key: Point) -> bool:
    """
    Vérifie une signature aveugle

    s·G == R + (R.x·h mod n)·Q

    Args:
        vote_hash: Le hash du vote
        signature: La signature (R, s)
        public_key: La clé publique de l'organisateur

    Returns:
        bool: True si la signature est valide

    Raises:
        InvalidSignature: Si R est le point à l'infini
    """
    R = signature.R
    if R is None:
        raise InvalidSignature("R ne peut pas être le point à l'infini")
    if public_key is None or not is_on_curve(public_key):
        raise ValueError("Clé publique invalide")

    if not is_on_curve(R):
        return False
    if not 0 <= signature.s < ORDER:
        return False

    lhs = scalar_mul(generator(), signature.s)
    rhs = add(R, scalar_mul(public_key, scalar_mul_mod(R[0], vote_hash)))
    return lhs == rhs


def check_ballot(vote: int, signature: Signature, params) -> int:
    """
    Vérifie un bulletin comme le fait le registre avant de le compter

    Args:
        vote: L'entier du vote
        signature: La signature aveugle obtenue de l'organisateur
        params: Les paramètres de l'élection (ElectionParams)

    Returns:
        int: Le choix contenu dans le vote

    Raises:
        InvalidSignature: Si la signature ne correspond pas au vote
        MalformedVote: Si le bourrage ou le choix est invalide
    """
    if not verify(hash_vote(vote), signature, params.organiser_public_key):
        raise InvalidSignature("La signature ne correspond pas au vote")

    choice, _ = decode(vote, params.zero_bits, params.nonce_bits)
    if not 1 <= choice <= params.number_of_candidates:
        raise MalformedVote(f"Choix hors limites : {choice}")
    return choice
