import requests
from jose import jwt, JWTError
from typing import Any, Dict

from curve import Point, is_on_curve
from errors import NoPendingSession, TransportError


class HttpOrganiser:
    def __init__(self, base_url: str, token: str, session=None):
        """
        Client HTTP du service de l'organisateur

        Args:
            base_url: L'URL de l'API (ex: http://localhost:8000)
            token: Le token JWT du demandeur
            session: Session HTTP compatible requests (requests.Session par défaut)
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        # Le serveur identifie le demandeur par le claim "sub" du token
        try:
            self.requester_id = jwt.get_unverified_claims(token).get("sub")
        except JWTError as e:
            raise ValueError(f"Token illisible : {e}") from e

    def _check_requester(self, requester_id: str):
        if requester_id != self.requester_id:
            raise ValueError(f"Le token appartient à {self.requester_id}, pas à {requester_id}")

    def _post(self, endpoint: str, data: Dict[str, Any] = None) -> Dict[str, Any]:
        """Effectue une requête POST authentifiée"""
        url = f"{self.base_url}/{endpoint}"
        headers = {"Authorization": f"Bearer {self.token}"}
        response = self.session.post(url, json=data, headers=headers)
        if response.status_code != 200:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            raise TransportError(response.status_code, str(detail))
        return response.json()

    def request_commitment(self, requester_id: str) -> Point:
        self._check_requester(requester_id)
        data = self._post("signing/point")
        R_ = (int(data["x"], 16), int(data["y"], 16))
        if not is_on_curve(R_):
            raise TransportError(200, "Point reçu hors de la courbe")
        return R_

    def respond_to_proof(self, requester_id: str, blinded_challenge: int) -> int:
        self._check_requester(requester_id)
        try:
            data = self._post("signing/proof", {"blinded_challenge": hex(blinded_challenge)})
        except TransportError as e:
            if e.status_code == 409:
                raise NoPendingSession(requester_id, e.detail) from e
            raise
        return int(data["s"], 16)
