import pytest

from curve import ORDER
from errors import MalformedVote, RandomnessFailure
from vote_encoder import decode, encode, hash_vote, new_vote


def test_encode_layout():
    vote, nonce = encode(1, 10, 10)
    assert 0 <= nonce < 2 ** 10
    assert vote == (1 << 20) | nonce
    assert vote >> 20 == 1
    assert (vote >> 10) & 0x3ff == 0


def test_encode_rejects_bad_input():
    with pytest.raises(ValueError):
        encode(0, 10, 10)
    with pytest.raises(ValueError):
        encode(1, -1, 10)
    with pytest.raises(ValueError):
        encode(4, 10, 246)


def test_encode_nonce_is_random():
    nonces = {encode(2, 10, 128)[1] for _ in range(10)}
    assert len(nonces) == 10


def test_decode_roundtrip_and_padding():
    vote, nonce = encode(3, 10, 200)
    assert decode(vote, 10, 200) == (3, nonce)
    with pytest.raises(MalformedVote):
        decode(vote | (1 << 205), 10, 200)


def test_hash_known_value():
    # keccak256(abi.encodePacked(uint256(0)))
    assert hash_vote(0) == 0x290decd9548b62a8d60345a988386fc84ba6bc95484008f6362f93160ef3e563


def test_hash_is_deterministic_and_reduced():
    vote, _ = encode(1, 10, 244)
    assert hash_vote(vote) == hash_vote(vote)
    assert hash_vote(vote) != hash_vote(vote ^ 1)
    assert 0 <= hash_vote(vote) < ORDER
    with pytest.raises(ValueError):
        hash_vote(1 << 256)


def test_new_vote():
    message = new_vote(2, 10, 10)
    assert message.choice == 2
    assert message.vote == (2 << 20) | message.nonce


def test_encode_fails_without_random_source(monkeypatch):
    import vote_encoder

    def broken(k):
        raise OSError("pas d'entropie")

    monkeypatch.setattr(vote_encoder, "randbits", broken)
    with pytest.raises(RandomnessFailure):
        encode(1, 10, 10)
