import pytest
from dmplbuilder.render import DmplBuilder, SvgBuilder


@pytest.fixture
def dmpl() -> DmplBuilder:
    """Provides a DM/PL builder in its default state."""
    return DmplBuilder()


@pytest.fixture
def svg() -> SvgBuilder:
    """Provides an SVG builder in its default state."""
    return SvgBuilder()
