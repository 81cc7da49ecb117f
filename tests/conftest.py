" generic fixtures "
import logging

import pytest

from scopeshell.commands import CommandTree
from scopeshell.ui import OutputBuffer

from .sample_commands import ClassInfo, ClassNew, NamespaceList, Ping


class FakeClient:
    "Stands in for the API client handed to commands"

    def __init__(self, namespaces=("default", "infra")):
        self._namespaces = list(namespaces)

    def namespaces(self):
        return list(self._namespaces)


@pytest.fixture
def buffer():
    return OutputBuffer()


def build_tree(sink, client=None):
    root = CommandTree(client=client)
    root.add_scope("class").add_command("info", ClassInfo(sink=sink)).add_command("create", ClassNew())
    root.add_scope("namespace").add_command("list", NamespaceList(sink=sink))
    root.add_command("ping", Ping(sink=sink))
    return root


@pytest.fixture
def tree(buffer):
    "class {create, info}, namespace {list}, ping"
    return build_tree(buffer)


@pytest.fixture
def client_tree(buffer):
    return build_tree(buffer, client=FakeClient())


@pytest.fixture
def scopeshell_logger():
    "Restores the package logger after a test installs handlers on it"
    logger = logging.getLogger("scopeshell")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    for handler in logger.handlers[:]:
        if handler not in saved[0]:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
