import pytest

from config import ElectionParams, load_key_pair, load_params
from curve import generator, scalar_mul
from errors import NoPendingSession
from models import KeyPair
from organiser import OrganiserService
from voting import cast_ballot, run_election
from verifier import check_ballot


def test_run_election_counts_every_voter():
    results = run_election(num_voters=12, workers=4)
    assert len(results) == 2
    assert sum(results) == 12


def test_cast_ballot_is_accepted():
    organiser = OrganiserService(KeyPair.from_private(7))
    params = ElectionParams("Question ?", ("A", "B"), 10, organiser.public_key)
    message, signature = cast_ballot(organiser, params, "voter", 2)
    assert check_ballot(message.vote, signature, params) == 2
    with pytest.raises(NoPendingSession):
        organiser.respond_to_proof("voter", 1)


def test_params_bit_widths():
    key_pair = KeyPair.from_private(7)
    params = load_params(key_pair, "Q ?", ["A", "B"], 10)
    assert params.vote_bits == 2
    assert params.nonce_bits == 244
    assert params.to_dict()["organiser_public_key"]["x"] == hex(scalar_mul(generator(), 7)[0])

    params = load_params(key_pair, "Q ?", [str(i) for i in range(10)], 10)
    assert params.vote_bits == 4
    assert params.vote_bits + params.zero_bits + params.nonce_bits == 256


def test_params_validation():
    key = KeyPair.generate().public_point
    with pytest.raises(ValueError):
        ElectionParams("Q ?", ("A",), 10, key)
    with pytest.raises(ValueError):
        ElectionParams("Q ?", ("A", "B"), 254, key)
    params = ElectionParams("Q ?", ("A", "B"), 10, key)
    with pytest.raises(ValueError):
        params.encode_vote(3)
    with pytest.raises(ValueError):
        params.encode_vote(0)


def test_load_key_pair():
    assert load_key_pair("7").private_scalar == 7
    assert load_key_pair(None).private_scalar > 0
    with pytest.raises(ValueError):
        load_key_pair("0")


def test_load_params_default_candidates():
    import config
    params = load_params(KeyPair.from_private(7))
    assert params.candidates == tuple(config.CANDIDATES)
    assert isinstance(params.candidates, tuple)
