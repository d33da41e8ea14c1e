"""Configures pytest further and provides shared key material fixtures."""
import pytest

from bytersa.keygen import KeyPair
from bytersa.randsrc import RandomSource


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower tests")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run exhaustive sweeps over the word")


def pytest_collection_modifyitems(config, items):
    skipdict = {}
    if config.getoption("--skip-slow"):
        skipdict["slow"] = pytest.mark.skip(reason="Slow test: needs no --skip-slow option")
    if not config.getoption("--run-extreme"):
        skipdict["extreme"] = pytest.mark.skip(reason="Exhaustive test: needs --run-extreme option")
    for item in items:
        for marker, skip in skipdict.items():
            if marker in item.keywords:
                item.add_marker(skip)


@pytest.fixture
def scripted_source(mocker):
    """Factory for random sources replaying a fixed list of draws."""

    def factory(values):
        source = mocker.Mock(spec=RandomSource)
        source.next.side_effect = values
        return source

    return factory


@pytest.fixture(scope="session")
def toy_key() -> KeyPair:
    """The textbook p = 61, q = 53 key pair."""
    return KeyPair(61, 53, 3233, 3120, 17, 2753)
