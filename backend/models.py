from dataclasses import dataclass
from typing import Dict

from curve import Point, generator, scalar_mul, random_scalar, ORDER, is_on_curve


@dataclass(frozen=True)
class KeyPair:
    """Paire de clés de l'organisateur, fixe pour toute l'élection"""
    private_scalar: int
    public_point: Point

    @classmethod
    def from_private(cls, private_scalar: int) -> "KeyPair":
        if not 0 < private_scalar < ORDER:
            raise ValueError("Clé privée invalide")
        return cls(private_scalar, scalar_mul(generator(), private_scalar))

    @classmethod
    def generate(cls) -> "KeyPair":
        return cls.from_private(random_scalar())


@dataclass
class Session:
    """Engagement éphémère (k, R_) détenu par l'organisateur pour un demandeur"""
    requester_id: str
    k: int
    R_: Point
    round_number: int


@dataclass
class BlindingContext:
    """Facteurs d'aveuglement du votant, jamais transmis"""
    a: int
    b: int
    R: Point


@dataclass(frozen=True)
class Signature:
    """Signature finale (R, s), vérifiable publiquement"""
    R: Point
    s: int

    def to_dict(self) -> Dict:
        if self.R is None:
            raise ValueError("R ne peut pas être le point à l'infini")
        return {
            "R": {"x": hex(self.R[0]), "y": hex(self.R[1])},
            "s": hex(self.s),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Signature":
        R = (int(data["R"]["x"], 16), int(data["R"]["y"], 16))
        if not is_on_curve(R):
            raise ValueError("R n'est pas sur la courbe")
        return cls(R, int(data["s"], 16))


@dataclass(frozen=True)
class VoteMessage:
    """Vote encodé : choix, nonce et entier final à hacher"""
    choice: int
    nonce: int
    vote: int
