import pytest

from helpers import user_json, users_json


@pytest.fixture
def small_network_text():
    # 1 <-> 2 mutual, 3 -> 1, 2 -> 3, 4 follows nobody
    return users_json(
        user_json(1, "Alice", [2], location="Reno"),
        user_json(2, "Bob", [1, 3], pic_url="http://example.com/bob.png"),
        user_json(3, "Carol", [1]),
        user_json(4, "Dave"),
    )


@pytest.fixture
def input_file(tmp_path, small_network_text):
    path = tmp_path / "users.json"
    path.write_text(small_network_text, encoding="utf-8")
    return path
