import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from models import KeyPair, VoteMessage
from vote_encoder import VOTE_WIDTH, new_vote

# Paramètres de l'élection (surchargeables par variables d'environnement)
QUESTION = os.environ.get("QUESTION", "Pour qui voulez-vous voter ?")
CANDIDATES = [c.strip() for c in os.environ.get("CANDIDATES", "Abhishek,Akash").split(",") if c.strip()]
ZERO_BITS = int(os.environ.get("ZERO_BITS", "10"))
ORGANISER_PRIVATE_KEY = os.environ.get("ORGANISER_PRIVATE_KEY")

# Authentification des demandeurs
SECRET_KEY = os.environ.get("SECRET_KEY", "votre_clé_secrète_très_longue_et_aléatoire")  # À changer en production !
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 30

# Journalisation
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class ElectionParams:
    """Paramètres publics de l'élection"""
    question: str
    candidates: Tuple[str, ...]
    zero_bits: int
    organiser_public_key: Tuple[int, int]

    def __post_init__(self):
        if len(self.candidates) < 2:
            raise ValueError("Il faut au moins 2 candidats")
        if self.zero_bits < 0:
            raise ValueError("Le nombre de bits à zéro doit être positif")
        if self.nonce_bits <= 0:
            raise ValueError(f"Pas assez de bits pour le nonce (largeur {VOTE_WIDTH})")

    @property
    def number_of_candidates(self) -> int:
        return len(self.candidates)

    @property
    def vote_bits(self) -> int:
        return self.number_of_candidates.bit_length()

    @property
    def nonce_bits(self) -> int:
        return VOTE_WIDTH - self.vote_bits - self.zero_bits

    def encode_vote(self, choice: int) -> VoteMessage:
        """Crée un vote pour un candidat numéroté à partir de 1"""
        if not 1 <= choice <= self.number_of_candidates:
            raise ValueError("Candidat invalide")
        return new_vote(choice, self.zero_bits, self.nonce_bits)

    def to_dict(self) -> Dict:
        return {
            "question": self.question,
            "candidates": list(self.candidates),
            "vote_bits": self.vote_bits,
            "zero_bits": self.zero_bits,
            "nonce_bits": self.nonce_bits,
            "organiser_public_key": {
                "x": hex(self.organiser_public_key[0]),
                "y": hex(self.organiser_public_key[1]),
            },
        }


def load_key_pair(private_key_hex: Optional[str] = ORGANISER_PRIVATE_KEY) -> KeyPair:
    """Charge la clé de l'organisateur, ou en génère une nouvelle"""
    if private_key_hex:
        return KeyPair.from_private(int(private_key_hex, 16))
    return KeyPair.generate()


def load_params(key_pair: KeyPair,
                question: str = QUESTION,
                candidates: Optional[List[str]] = None,
                zero_bits: int = ZERO_BITS) -> ElectionParams:
    if candidates is None:
        candidates = CANDIDATES
    return ElectionParams(question, tuple(candidates), zero_bits, key_pair.public_point)


def setup_logging(level: str = LOG_LEVEL):
    logging.basicConfig(format=LOG_FORMAT, level=level)
