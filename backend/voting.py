from concurrent.futures import ThreadPoolExecutor
from secrets import randbelow
from typing import List, Optional, Tuple

from config import ElectionParams, load_params, setup_logging
from models import KeyPair, Signature, VoteMessage
from organiser import OrganiserService
from requester import RequesterClient
from verifier import check_ballot
from vote_encoder import hash_vote

NUM_VOTERS = 10


def cast_ballot(organiser: OrganiserService, params: ElectionParams,
                voter_id: str, choice: int) -> Tuple[VoteMessage, Signature]:
    """Encode le vote d'un votant et obtient sa signature aveugle"""
    message = params.encode_vote(choice)
    client = RequesterClient(organiser, voter_id, public_key=params.organiser_public_key)
    signature = client.collect_signature(hash_vote(message.vote))
    return message, signature


def run_election(num_voters: int = NUM_VOTERS,
                 params: Optional[ElectionParams] = None,
                 organiser: Optional[OrganiserService] = None,
                 workers: int = 4) -> List[int]:
    """
    Simule une élection complète avec des votants concurrents

    Returns:
        List[int]: Le nombre de voix par candidat (dans l'ordre des candidats)
    """
    if organiser is None:
        organiser = OrganiserService(KeyPair.generate())
    if params is None:
        params = load_params(organiser.key_pair)

    choices = [randbelow(params.number_of_candidates) + 1 for _ in range(num_voters)]

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [
            pool.submit(cast_ballot, organiser, params, f"voter-{i}", choice)
            for i, choice in enumerate(choices)
        ]
        ballots = [f.result() for f in futures]

    # Chaque bulletin est vérifié comme le ferait le registre
    results = [0] * params.number_of_candidates
    for message, signature in ballots:
        choice = check_ballot(message.vote, signature, params)
        results[choice - 1] += 1

    if sum(results) != num_voters:
        raise ValueError(f"Nombre total de votes ({sum(results)}) différent du nombre de votants ({num_voters})")
    return results


if __name__ == "__main__":
    setup_logging("WARNING")
    organiser = OrganiserService(KeyPair.generate())
    params = load_params(organiser.key_pair)
    results = run_election(NUM_VOTERS, params, organiser)

    print(f"\n{params.question}")
    for label, count in zip(params.candidates, results):
        print(f"{label}: {count} votes")
