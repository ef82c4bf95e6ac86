import os
from collections.abc import Callable

import pytest
from lxml import etree


# Settings are read from the environment; keep unit tests independent of the host.
for env_key in list(os.environ):
    if env_key.startswith("SOAP_HTTP_"):
        del os.environ[env_key]


@pytest.fixture
def fake_body() -> etree._Element:
    return etree.Element("FakeMethod")


@pytest.fixture
def fake_header() -> etree._Element:
    return etree.Element("FakeHeader")


@pytest.fixture
def canonical() -> Callable[[str | bytes], str]:
    """Return a canonicalizer so XML can be compared independent of formatting."""
    def _canonical(xml: str | bytes) -> str:
        text = xml.decode("utf-8") if isinstance(xml, bytes) else xml
        return etree.canonicalize(xml_data=text, strip_text=True)
    return _canonical
