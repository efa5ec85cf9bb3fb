import logging
from typing import Optional, Tuple

from curve import (
    Point, add, generator, invert, is_on_curve, random_scalar,
    scalar_add, scalar_mul, scalar_mul_mod,
)
from errors import InvalidSignature
from models import BlindingContext, Signature
from verifier import verify

logger = logging.getLogger(__name__)


def blind(R_: Point, vote_hash: int) -> Tuple[BlindingContext, int]:
    """
    Aveugle l'engagement de l'organisateur et calcule le défi à lui envoyer

    R = a·R_ + b·G
    m_ = a⁻¹·R.x·h mod n

    Args:
        R_: L'engagement reçu de l'organisateur
        vote_hash: Le hash du vote à signer

    Returns:
        Tuple[BlindingContext, int]: (contexte local, défi aveuglé m_)

    Raises:
        ValueError: Si R_ est l'infini ou n'est pas sur la courbe
    """
    if R_ is None or not is_on_curve(R_):
        raise ValueError("Engagement de l'organisateur invalide")

    while True:
        # random_scalar ne renvoie jamais 0, a est donc toujours inversible
        a = random_scalar()
        b = random_scalar()
        R = add(scalar_mul(R_, a), scalar_mul(generator(), b))
        if R is not None:
            break

    m_ = scalar_mul_mod(scalar_mul_mod(invert(a), R[0]), vote_hash)
    return BlindingContext(a, b, R), m_


def unblind(context: BlindingContext, s_: int) -> Signature:
    """Retire l'aveuglement de la preuve partielle : s = s_·a + b mod n"""
    s = scalar_add(scalar_mul_mod(s_, context.a), context.b)
    return Signature(context.R, s)


class RequesterClient:
    def __init__(self, organiser, requester_id: str, public_key: Optional[Point] = None):
        """
        Client du votant pour obtenir une signature aveugle

        Args:
            organiser: Objet exposant request_commitment et respond_to_proof
                (service local ou HttpOrganiser)
            requester_id: L'identifiant du demandeur
            public_key: Si fournie, la signature est vérifiée avant d'être rendue
        """
        self.organiser = organiser
        self.requester_id = requester_id
        self.public_key = public_key

    def collect_signature(self, vote_hash: int) -> Signature:
        """
        Déroule un tour complet du protocole et renvoie la signature finale

        Raises:
            NoPendingSession: Si l'organisateur n'a plus de session pour ce demandeur
            InvalidSignature: Si la signature obtenue ne se vérifie pas
        """
        R_ = self.organiser.request_commitment(self.requester_id)
        context, m_ = blind(R_, vote_hash)
        s_ = self.organiser.respond_to_proof(self.requester_id, m_)
        signature = unblind(context, s_)

        if self.public_key is not None and not verify(vote_hash, signature, self.public_key):
            logger.warning("Signature invalide reçue pour %s", self.requester_id)
            raise InvalidSignature("Signature invalide reçue de l'organisateur")
        return signature
