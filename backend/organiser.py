import itertools
import logging
import threading
from typing import Dict

from curve import Point, generator, scalar_mul, random_scalar, scalar_add, scalar_mul_mod
from errors import NoPendingSession
from models import KeyPair, Session

logger = logging.getLogger(__name__)


class OrganiserService:
    def __init__(self, key_pair: KeyPair):
        """
        Initialise le service de signature de l'organisateur

        Args:
            key_pair: La paire de clés de l'élection (lecture seule)
        """
        self.key_pair = key_pair
        # Une session par demandeur, jamais partagée
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()
        self._rounds = itertools.count(1)

    @property
    def public_key(self) -> Point:
        return self.key_pair.public_point

    def request_commitment(self, requester_id: str) -> Point:
        """
        Génère un engagement éphémère (k, R_ = k·G) pour un demandeur

        Une nouvelle demande remplace toute session non consommée du même demandeur.

        Returns:
            Point: R_
        """
        k = random_scalar()
        R_ = scalar_mul(generator(), k)

        with self._lock:
            round_number = next(self._rounds)
            replaced = self._sessions.get(requester_id)
            self._sessions[requester_id] = Session(requester_id, k, R_, round_number)

        if replaced is not None:
            logger.info("Session %d de %s remplacée par la session %d",
                        replaced.round_number, requester_id, round_number)
        logger.info("Engagement émis pour %s (session %d)", requester_id, round_number)
        return R_

    def respond_to_proof(self, requester_id: str, blinded_challenge: int) -> int:
        """
        Signe le défi aveuglé avec l'engagement du demandeur et consomme la session

        s_ = (d·m_ + k) mod n

        Args:
            requester_id: L'identifiant du demandeur
            blinded_challenge: Le défi aveuglé m_

        Returns:
            int: La preuve partielle s_

        Raises:
            NoPendingSession: Si aucun engagement n'est en attente pour ce demandeur
        """
        with self._lock:
            session = self._sessions.pop(requester_id, None)

        if session is None:
            logger.warning("Preuve demandée sans engagement en attente par %s", requester_id)
            raise NoPendingSession(requester_id)

        s_ = scalar_add(scalar_mul_mod(self.key_pair.private_scalar, blinded_challenge), session.k)
        logger.info("Preuve émise pour %s (session %d)", requester_id, session.round_number)
        return s_

    def has_pending_session(self, requester_id: str) -> bool:
        with self._lock:
            return requester_id in self._sessions

    def pending_count(self) -> int:
        with self._lock:
            return len(self._sessions)
