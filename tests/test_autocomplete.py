import enum

from scopeshell.commands import CommandTree, bool_values, choices, remote, value_after

from .conftest import FakeClient


def test_bool_values():
    assert bool_values(CommandTree(), "", []) == ["true", "false"]


def test_choices_filters_by_prefix():
    complete = choices("alpha", "beta", "alps")
    assert complete(CommandTree(), "al", []) == ["alpha", "alps"]


class Shape(str, enum.Enum):
    ROUND = "round"
    SQUARE = "square"


def test_choices_accepts_enums():
    complete = choices(Shape, "oval")
    assert complete(CommandTree(), "", []) == ["round", "square", "oval"]


def test_value_after():
    tokens = ["class", "create", "-N", "ns1", "--name", "x"]
    assert value_after(tokens, "-N", "--namespace") == "ns1"
    assert value_after(tokens, "--missing") is None
    assert value_after(["class", "-N"], "-N") is None


def list_namespaces(client, prefix, tokens):
    return [name for name in client.namespaces() if name.startswith(prefix)]


def test_remote_uses_the_tree_client():
    complete = remote(list_namespaces)
    tree = CommandTree(client=FakeClient())
    assert complete(tree, "in", []) == ["infra"]
    assert complete.__name__ == "list_namespaces"


def test_remote_without_client_or_when_disabled():
    complete = remote(list_namespaces)
    assert complete(CommandTree(), "", []) == []
    assert complete(CommandTree(client=FakeClient(), api_completion=False), "", []) == []


def test_remote_failures_become_empty():
    def broken(client, prefix, tokens):
        raise ConnectionError("offline")

    assert remote(broken)(CommandTree(client=FakeClient()), "", []) == []
