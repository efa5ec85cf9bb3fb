import logging

from fastapi import FastAPI, HTTPException, Depends
from pydantic import BaseModel
from typing import Dict
import uvicorn

from auth import get_requester_id
from config import load_key_pair, load_params, setup_logging
from errors import InvalidSignature, MalformedVote, NoPendingSession
from models import Signature
from organiser import OrganiserService
from verifier import check_ballot

logger = logging.getLogger(__name__)

app = FastAPI(title="Service de signature aveugle de l'organisateur")

# Clé de l'élection, chargée une seule fois au démarrage
key_pair = load_key_pair()
organiser = OrganiserService(key_pair)
params = load_params(key_pair)

class PointResponse(BaseModel):
    x: str
    y: str

class ProofRequest(BaseModel):
    blinded_challenge: str

class ProofResponse(BaseModel):
    s: str

class BallotCheck(BaseModel):
    vote: str
    signature: Dict

class BallotCheckResponse(BaseModel):
    valid: bool
    choice: int

def parse_hex(value: str, field: str) -> int:
    """Convertit une chaîne hexadécimale en entier"""
    try:
        return int(value, 16)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"{field} doit être un entier hexadécimal")

@app.get("/election")
async def get_election():
    """Retourne les paramètres publics de l'élection"""
    return params.to_dict()

@app.post("/signing/point", response_model=PointResponse)
def request_point(requester_id: str = Depends(get_requester_id)):
    """Émet un engagement éphémère R_ pour le demandeur"""
    R_ = organiser.request_commitment(requester_id)
    return PointResponse(x=hex(R_[0]), y=hex(R_[1]))

@app.post("/signing/proof", response_model=ProofResponse)
def request_proof(
    proof: ProofRequest,
    requester_id: str = Depends(get_requester_id)
):
    """Signe le défi aveuglé avec l'engagement en attente du demandeur"""
    m_ = parse_hex(proof.blinded_challenge, "blinded_challenge")
    try:
        s_ = organiser.respond_to_proof(requester_id, m_)
    except NoPendingSession as e:
        raise HTTPException(status_code=409, detail=str(e))
    return ProofResponse(s=hex(s_))

@app.post("/ballot/check", response_model=BallotCheckResponse)
def check(ballot: BallotCheck):
    """Vérifie un bulletin (signature et bourrage) sans l'enregistrer"""
    vote = parse_hex(ballot.vote, "vote")
    try:
        signature = Signature.from_dict(ballot.signature)
        choice = check_ballot(vote, signature, params)
    except (KeyError, TypeError) as e:
        raise HTTPException(status_code=422, detail=f"Signature mal formée : {e}")
    except (InvalidSignature, MalformedVote, ValueError) as e:
        logger.info("Bulletin rejeté : %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    return BallotCheckResponse(valid=True, choice=choice)

if __name__ == "__main__":
    setup_logging()
    uvicorn.run(app, host="0.0.0.0", port=8000)
