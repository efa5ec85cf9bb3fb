from typing import Optional


class BlindSignatureError(Exception):
    """Classe de base pour les erreurs du protocole de signature aveugle"""
    pass


class NotInvertible(BlindSignatureError):
    """Le scalaire n'a pas d'inverse modulo l'ordre de la courbe (scalaire nul)"""
    pass


class NoPendingSession(BlindSignatureError):
    """Aucun engagement en attente pour ce demandeur"""

    def __init__(self, requester_id: str, message: Optional[str] = None):
        self.requester_id = requester_id
        super().__init__(message or f"Aucune session en attente pour {requester_id}")


class InvalidSignature(BlindSignatureError):
    """Échec de vérification d'une signature (y compris R à l'infini)"""
    pass


class RandomnessFailure(BlindSignatureError):
    """La source d'aléa cryptographique est indisponible"""
    pass


class MalformedVote(BlindSignatureError):
    """Vote décodé invalide : bits de bourrage non nuls ou choix hors limites"""
    pass


class TransportError(BlindSignatureError):
    """Erreur de l'organisateur distant autre qu'une session manquante"""

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"[{status_code}] {detail}")
