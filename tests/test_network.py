import itertools
import random

import pytest

from errors import ErrorKind, NetworkError
from network import Relationships, SocialNetwork, read_network
from record_parser import parse_records
from user_record import DEFAULT_PIC_URL, UserRecord


def make_network(follows):
    """follows maps user id -> list of followed ids."""
    records = [UserRecord(id=user_id, name=f"user-{user_id}", follows=list(f)) for user_id, f in follows.items()]
    return SocialNetwork(records)


def test_example_scenario_is_mutual():
    network = SocialNetwork(parse_records(
        '[{"id_str":"1","name":"A","follows":["2"]},{"id_str":"2","name":"B","follows":["1"]}]'
    ))
    assert network.relationships_for(1) == Relationships(follows=[2], followers=[2], mutuals=[2])
    assert network.relationships_for(2) == Relationships(follows=[1], followers=[1], mutuals=[1])


def test_small_network(input_file):
    network = read_network(str(input_file))
    assert len(network) == 4
    assert network.index_entries() == [(1, "Alice"), (2, "Bob"), (3, "Carol"), (4, "Dave")]
    assert network.followers(1) == [2, 3]
    assert network.mutuals(1) == [2]
    assert network.follows(2) == [1, 3]
    assert network.mutuals(3) == []
    assert network.relationships_for(4) == Relationships()
    assert network.get_user(4).pic_url == DEFAULT_PIC_URL


def test_adjacency_matrix():
    network = make_network({1: [2, 3], 2: [], 3: [1]})
    assert network.adjacency.tolist() == [
        [False, True, True],
        [False, False, False],
        [True, False, False],
    ]
    assert network.is_following(1, 3)
    assert not network.is_following(3, 2)


def test_unsorted_records_are_sorted_by_id():
    records = [
        UserRecord(id=3, name="C", follows=[1]),
        UserRecord(id=1, name="A", follows=[2, 3]),
        UserRecord(id=2, name="B"),
    ]
    network = SocialNetwork(records)
    assert [user.id for user in network.records] == [1, 2, 3]
    assert network.names == ["A", "B", "C"]
    assert network.followers(1) == [3]
    assert network.mutuals(1) == [3]


def test_sort_invariance():
    follows = {1: [2, 3, 5], 2: [1], 3: [4, 5], 4: [3, 1], 5: [1, 2, 3, 4], 6: []}
    reference = make_network(follows)
    records = list(reference.records)
    rng = random.Random(7)
    for _ in range(10):
        rng.shuffle(records)
        shuffled = SocialNetwork(records)
        for user_id in reference.ids:
            assert shuffled.relationships_for(user_id) == reference.relationships_for(user_id)
        assert (shuffled.adjacency == reference.adjacency).all()


def test_mutual_symmetry_and_follower_consistency():
    follows = {1: [2, 4], 2: [1, 3], 3: [2, 4, 1], 4: [], 5: [5, 1, 1]}
    network = make_network(follows)
    for a, b in itertools.product(network.ids, repeat=2):
        a_follows_b = b in follows[a]
        b_follows_a = a in follows[b]
        if a != b:
            assert (a in network.followers(b)) == a_follows_b
            assert (b in network.mutuals(a)) == (a in network.mutuals(b)) == (a_follows_b and b_follows_a)
        assert network.is_following(a, b) == a_follows_b


def test_self_follow_and_duplicates():
    network = make_network({1: [1, 2, 2], 2: []})
    assert network.follows(1) == [1, 2, 2]
    assert network.followers(1) == []
    assert network.mutuals(1) == []
    assert network.followers(2) == [1]


def test_empty_network():
    with pytest.raises(NetworkError) as exc_info:
        SocialNetwork([])
    assert exc_info.value.kind is ErrorKind.EMPTY_NETWORK


@pytest.mark.parametrize("follows", [
    {1: [2], 2: [3]},
    {1: [0], 2: []},
])
def test_follows_out_of_range(follows):
    with pytest.raises(NetworkError) as exc_info:
        make_network(follows)
    assert exc_info.value.kind is ErrorKind.MALFORMED_RECORD
    assert "follows unknown id" in exc_info.value.message


@pytest.mark.parametrize("ids", [[1, 3], [2, 3], [1, 1, 2]])
def test_ids_must_be_dense(ids):
    records = [UserRecord(id=user_id, name="x") for user_id in ids]
    with pytest.raises(NetworkError) as exc_info:
        SocialNetwork(records)
    assert exc_info.value.kind is ErrorKind.MALFORMED_RECORD


def test_invalid_record_rejected():
    with pytest.raises(NetworkError) as exc_info:
        SocialNetwork([UserRecord(id=1, name="")])
    assert exc_info.value.kind is ErrorKind.MALFORMED_RECORD


def test_query_outside_range():
    network = make_network({1: [], 2: []})
    with pytest.raises(IndexError):
        network.is_following(1, 3)
    with pytest.raises(IndexError):
        network.followers(0)


def test_network_is_read_only():
    network = make_network({1: [], 2: []})
    with pytest.raises(ValueError):
        network.adjacency[0, 1] = True


def test_read_network_missing_file(tmp_path):
    with pytest.raises(NetworkError) as exc_info:
        read_network(str(tmp_path / "missing.json"))
    assert exc_info.value.kind is ErrorKind.INPUT_OPEN


def test_user_record_text():
    record = UserRecord(id=2, name="Bob", location="Reno", follows=[1, 3])
    assert str(record) == (
        "id: 2\nname: Bob\nlocation: Reno\n"
        f"pic url: {DEFAULT_PIC_URL}\nFollows: [ 1 3 ]\n"
    )
    assert str(UserRecord(id=1, name="A")).endswith("Follows: [ ]\n")
